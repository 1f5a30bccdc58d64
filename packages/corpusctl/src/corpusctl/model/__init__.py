from .corpus import Corpus, normalize_corpus_path
from .document import CodeSample, CrossReference, Document, Heading, ReferenceKind

__all__ = [
    "CodeSample",
    "Corpus",
    "CrossReference",
    "Document",
    "Heading",
    "ReferenceKind",
    "normalize_corpus_path",
]
