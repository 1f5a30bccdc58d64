from .graph import DanglingReference, ReferenceGraph, build_graph
from .keywords import KeywordIndex, SearchHit, build_keyword_index

__all__ = ["DanglingReference", "KeywordIndex", "ReferenceGraph", "SearchHit", "build_graph", "build_keyword_index"]
