"""
Where something is, for whatever prints error messages.
A span is a file (maybe) and a slice of the source text the host handed over.
"""
from pathlib import Path
from typing import NamedTuple, Optional
from .syntax import Tree, Node

class Span(NamedTuple):
	path: Optional[Path]
	slice: slice

def span_of(tree:Tree, node:Node) -> Span:
	return Span(tree.path, slice(node.start, node.stop))

def cover(tree:Tree, first:Node, last:Node) -> Span:
	""" From the start of one node to the end of another """
	assert first.start <= last.stop
	return Span(tree.path, slice(first.start, last.stop))
