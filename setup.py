# setup.py
from setuptools import setup, find_packages

setup(
    name="monkey-lang",
    version="0.1.0",
    description="Lexer, Pratt parser and tree-walking evaluator for the Monkey language",
    packages=find_packages(include=["monkey", "monkey.*", "monkey_lsp", "monkey_lsp.*"]),
    python_requires=">=3.11",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "monkey=monkey.repl:main",
            "monkey-ls=monkey_lsp.server:main",
        ],
    },
    zip_safe=False,
)
