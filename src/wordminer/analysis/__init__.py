"""Text analysis: tokenizing, lemmatizing, counting and overlap."""

from wordminer.analysis.aggregator import AnnotatedToken, analyze, annotate, snapshot_rows
from wordminer.analysis.lemmatizer import lemmatize
from wordminer.analysis.overlap import OverlapEngine, compute_overlap
from wordminer.analysis.tokenizer import TokenStream, segments, tokenize

__all__ = [
    "AnnotatedToken",
    "OverlapEngine",
    "TokenStream",
    "analyze",
    "annotate",
    "compute_overlap",
    "lemmatize",
    "segments",
    "snapshot_rows",
    "tokenize",
]
