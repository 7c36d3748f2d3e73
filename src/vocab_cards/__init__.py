"""vocab-cards package.

Turns vocabulary spreadsheets and CSV files into cards with typed back
sections (definition, collocation, example, word family).
"""

__all__ = [
    "tokenizer",
    "normalize",
    "sections",
    "builder",
    "ingest",
    "browse",
    "report",
]
