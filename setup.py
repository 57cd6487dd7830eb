# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="prompt-normalizer",
    version="1.0.0",
    description="Assemble LLM prompts from a selected subset of a project's files",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["promptnormalizer*"]),
    python_requires=">=3.8",
    install_requires=[
        "tiktoken",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'prompt-normalizer=promptnormalizer.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
