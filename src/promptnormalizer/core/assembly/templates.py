from __future__ import annotations

"""
Prompt Assembler.

Fixed prompt layouts filled by plain string.Template substitution. No
processing happens beyond substitution: the code and structure sections
arrive fully rendered.
"""

from string import Template
from typing import Dict

from promptnormalizer.domain.constants import (
    TEMPLATE_ALIASES,
    TEMPLATE_CODEGEN,
    TEMPLATE_NONE,
    TEMPLATE_REVIEW,
)
from promptnormalizer.domain.prompt_models import PromptFields

# -----------------------------------------------------------------------------
# TEMPLATE BODIES
# -----------------------------------------------------------------------------

CODEGEN_TEMPLATE = Template("""\
You are an AI code generator responsible for implementing a web application based on a provided technical specification and implementation plan.

Your task is to systematically implement each step of the plan, one at a time.

First, carefully review the following inputs:

<project_request>
${project_request}
</project_request>

<project_rules>
${project_rules}
</project_rules>

<technical_specification>
${technical_specification}
</technical_specification>

<implementation_plan>
${implementation_plan}
</implementation_plan>

<existing_code>
${existing_code}
</existing_code>

Your task is to:
1. Identify the next incomplete step from the implementation plan (marked with `- [ ]`)
2. Generate the necessary code for all files specified in that step
3. Return the generated code

The implementation plan is just a suggestion meant to provide a high-level overview of the objective. Use it to guide you, but you do not have to adhere to it strictly. Make sure to follow the given rules as you work along the lines of the plan.

For EVERY file you modify or create, you MUST provide the COMPLETE file contents in the format above.

Each file should be wrapped in a code block with its file path above it and a "Here's what I did and why":

Here's what I did and why: [text here...]
Filepath: src/components/Example.tsx
```
/**
 * @description
 * This component handles [specific functionality].
 * It is responsible for [specific responsibilities].
 *
 * Key features:
 * - Feature 1: Description
 * - Feature 2: Description
 *
 * @dependencies
 * - DependencyA: Used for X
 * - DependencyB: Used for Y
 *
 * @notes
 * - Important implementation detail 1
 * - Important implementation detail 2
 */

BEGIN WRITING FILE CODE
// Complete implementation with extensive inline comments & documentation...
```

Documentation requirements:
- File-level documentation explaining the purpose and scope
- Component/function-level documentation detailing inputs, outputs, and behavior
- Inline comments explaining complex logic or business rules
- Type documentation for all interfaces and types
- Notes about edge cases and error handling
- Any assumptions or limitations

Guidelines:
- Implement exactly one step at a time
- Ensure all code follows the project rules and technical specification
- Include ALL necessary imports and dependencies
- Write clean, well-documented code with appropriate error handling
- Always provide COMPLETE file contents - never use ellipsis (...) or placeholder comments
- Never skip any sections of any file - provide the entire file every time
- Handle edge cases and add input validation where appropriate
- Follow TypeScript best practices and ensure type safety
- Include necessary tests as specified in the testing strategy

Begin by identifying the next incomplete step from the plan, then generate the required code (with complete file contents and documentation).

Above each file, include a "Here's what I did and why" explanation of what you did for that file.

Then end with "STEP X COMPLETE. Here's what I did and why:" followed by an explanation of what you did and then a "USER INSTRUCTIONS: Please do the following:" followed by manual instructions for the user for things you can't do like installing libraries, updating configurations on services, etc.

You also have permission to update the implementation plan if needed. If you update the implementation plan, include each modified step in full and return them as markdown code blocks at the end of the user instructions. No need to mark the current step as complete - that is implied.""")

REVIEW_TEMPLATE = Template("""\
You are an expert code reviewer and optimizer responsible for analyzing the implemented code and creating a detailed optimization plan. Your task is to review the code that was implemented according to the original plan and generate a new implementation plan focused on improvements and optimizations.

Please review the following context and implementation:

<project_request>
${project_request}
</project_request>

<project_rules>
${project_rules}
</project_rules>

<technical_specification>
${technical_specification}
</technical_specification>

<implementation_plan>
${implementation_plan}
</implementation_plan>

<existing_code>
${existing_code}
</existing_code>

First, analyze the implemented code against the original requirements and plan. Consider the following areas:

1. Code Organization and Structure
   - Review implementation of completed steps against the original plan
   - Identify opportunities to improve folder/file organization
   - Look for components that could be better composed or hierarchically organized
   - Find opportunities for code modularization
   - Consider separation of concerns

2. Code Quality and Best Practices
   - Look for TypeScript/React anti-patterns
   - Identify areas needing improved type safety
   - Find places needing better error handling
   - Look for opportunities to improve code reuse
   - Review naming conventions

3. UI/UX Improvements
   - Review UI components against requirements
   - Look for accessibility issues
   - Identify component composition improvements
   - Review responsive design implementation
   - Check error message handling

Wrap your analysis in <analysis> tags, then create a detailed optimization plan using the following format:

```md
# Optimization Plan
## [Category Name]
- [ ] Step 1: [Brief title]
  - **Task**: [Detailed explanation of what needs to be optimized/improved]
  - **Files**: [List of files]
    - `path/to/file1.cs`: [Description of changes]
  - **Step Dependencies**: [Any steps that must be completed first]
  - **User Instructions**: [Any manual steps required]
[Additional steps...]
```

For each step in your plan:
1. Focus on specific, concrete improvements
2. Keep changes manageable (no more than 20 files per step, ideally less)
3. Ensure steps build logically on each other
4. Preserve starter template code and patterns
5. Maintain existing functionality
6. Follow project rules and technical specifications

Your plan should be detailed enough for a code generation AI to implement each step in a single iteration. Order steps by priority and dependency requirements.

Remember:
- Focus on implemented code, not starter template code
- Maintain consistency with existing patterns
- Ensure each step is atomic and self-contained
- Include clear success criteria for each step
- Consider the impact of changes on the overall system

Begin your response with your analysis of the current implementation, then proceed to create your detailed optimization plan.""")

DEFAULT_TEMPLATE = Template("""\
PROJECT REQUEST:
${project_request}

PROJECT RULES:
${project_rules}

TECHNICAL SPECIFICATION:
${technical_specification}

${directory_structure_section}SELECTED FILES & CONTENT:
${existing_code}
IMPLEMENTATION PLAN:
${implementation_plan}
""")

STRUCTURE_SECTION = Template("""\
DIRECTORY STRUCTURE:
${directory_structure}

""")

_TEMPLATES: Dict[str, Template] = {
    TEMPLATE_CODEGEN: CODEGEN_TEMPLATE,
    TEMPLATE_REVIEW: REVIEW_TEMPLATE,
    TEMPLATE_NONE: DEFAULT_TEMPLATE,
}

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def normalize_template_name(name: str) -> str:
    """
    Map a user-facing template label to its canonical identifier.

    'Codegen Prompt', 'codegen' -> 'Codegen'; 'Review Prompt' -> 'Review';
    anything unrecognized selects the default layout ('None').
    """
    return TEMPLATE_ALIASES.get((name or "").strip().lower(), TEMPLATE_NONE)


def assemble_prompt(
        template: str,
        fields: PromptFields,
        code_section: str,
        structure_section: str = "",
) -> str:
    """
    Substitute fields and rendered sections into the selected layout.

    The Codegen and Review layouts carry no directory structure slot; the
    default layout includes it only when non-empty.

    Args:
        template: Template label (Codegen, Review, None).
        fields: Free-text prompt fields.
        code_section: Output of the selection walker.
        structure_section: Output of the tree renderer, or "".

    Returns:
        str: The assembled prompt.
    """
    name = normalize_template_name(template)

    structure_block = ""
    if structure_section:
        structure_block = STRUCTURE_SECTION.substitute(directory_structure=structure_section)

    return _TEMPLATES[name].substitute(
        project_request=fields.request,
        project_rules=fields.rules,
        technical_specification=fields.spec,
        implementation_plan=fields.plan,
        existing_code=code_section,
        directory_structure_section=structure_block,
    )
