from __future__ import annotations

"""
Unit tests for the Prompt Assembler.

Verifies template name normalization and substitution of fields and
rendered sections into each layout.
"""

import pytest

from promptnormalizer.core.assembly.templates import assemble_prompt, normalize_template_name
from promptnormalizer.domain.prompt_models import PromptFields

FIELDS = PromptFields(request="REQ", rules="RULES", spec="SPEC", plan="PLAN")


@pytest.mark.parametrize(
    "label, expected",
    [
        ("Codegen Prompt", "Codegen"),
        ("codegen", "Codegen"),
        ("  Review Prompt ", "Review"),
        ("None", "None"),
        ("something else", "None"),
        ("", "None"),
        (None, "None"),
    ],
)
def test_normalize_template_name(label, expected) -> None:
    assert normalize_template_name(label) == expected


def test_default_layout_with_structure() -> None:
    out = assemble_prompt("None", FIELDS, "CODE\n", "├─ r\n")
    assert out == (
        "PROJECT REQUEST:\nREQ\n\n"
        "PROJECT RULES:\nRULES\n\n"
        "TECHNICAL SPECIFICATION:\nSPEC\n\n"
        "DIRECTORY STRUCTURE:\n├─ r\n\n\n"
        "SELECTED FILES & CONTENT:\nCODE\n\n"
        "IMPLEMENTATION PLAN:\nPLAN\n"
    )


def test_default_layout_without_structure() -> None:
    out = assemble_prompt("None", FIELDS, "CODE\n")
    assert "DIRECTORY STRUCTURE" not in out
    assert "TECHNICAL SPECIFICATION:\nSPEC\n\nSELECTED FILES & CONTENT:" in out


@pytest.mark.parametrize("template", ["Codegen", "Review"])
def test_instruction_layouts_fill_all_slots(template: str) -> None:
    out = assemble_prompt(template, FIELDS, "CODE", "├─ r\n")

    assert "<project_request>\nREQ\n</project_request>" in out
    assert "<project_rules>\nRULES\n</project_rules>" in out
    assert "<technical_specification>\nSPEC\n</technical_specification>" in out
    assert "<implementation_plan>\nPLAN\n</implementation_plan>" in out
    assert "<existing_code>\nCODE\n</existing_code>" in out
    assert "DIRECTORY STRUCTURE" not in out
    assert "${" not in out


def test_codegen_and_review_differ() -> None:
    codegen = assemble_prompt("Codegen", FIELDS, "")
    review = assemble_prompt("Review", FIELDS, "")
    assert codegen.startswith("You are an AI code generator")
    assert review.startswith("You are an expert code reviewer")


def test_field_text_is_not_reinterpreted() -> None:
    fields = PromptFields(request="cost $5 and ${project_rules}")
    out = assemble_prompt("None", fields, "")
    assert "cost $5 and ${project_rules}" in out
