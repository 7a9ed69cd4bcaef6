"""
Depth-bounded searches up and down a syntax tree.

These work on anything that answers parent_of and children_of for its nodes.
Every predicate gets the candidate node and its distance from where the
search began; the starting node itself is at depth zero.

A healthy tree is finite and shallow, so the bound only trips on a malformed
snapshot, such as one whose links form a cycle.
"""
from typing import Any, Callable, Optional

MAX_DEPTH = 64

Test = Callable[[Any, int], bool]

class RecursionTooDeep(RecursionError):
	def __init__(self):
		super().__init__("Syntax tree recursion was too deep. (max %d)" % MAX_DEPTH)

def _upward(tree, node, test:Test, stop_on_first:bool, depth:int) -> list:
	if depth >= MAX_DEPTH:
		raise RecursionTooDeep()
	result = []
	if test(node, depth):
		result.append(node)
		if stop_on_first: return result
	parent = tree.parent_of(node)
	if parent is not None:
		result.extend(_upward(tree, parent, test, stop_on_first, depth + 1))
	return result

def _downward(tree, node, test:Test, stop_on_first:bool, depth:int) -> list:
	if depth >= MAX_DEPTH:
		raise RecursionTooDeep()
	result = []
	if test(node, depth):
		result.append(node)
		if stop_on_first: return result
	for child in tree.children_of(node):
		result.extend(_downward(tree, child, test, stop_on_first, depth + 1))
		if stop_on_first and result: break
	return result

def recursive_parents(tree, node, test:Test) -> list:
	""" Everything from here to the root passing the test, nearest first. """
	return _upward(tree, node, test, False, 0)

def first_parent(tree, node, test:Test) -> Optional[Any]:
	found = _upward(tree, node, test, True, 0)
	return found[0] if found else None

def last_parent(tree, node, test:Test) -> Optional[Any]:
	""" The topmost (nearest the root) node passing the test """
	found = _upward(tree, node, test, False, 0)
	return found[-1] if found else None

def recursive_children(tree, node, test:Test, stop_on_first:bool=False) -> list:
	""" Pre-order, so outer nodes come before the nodes they contain. """
	return _downward(tree, node, test, stop_on_first, 0)

def all_children(tree, node, test:Test) -> list:
	return _downward(tree, node, test, False, 0)

def first_child(tree, node, test:Test) -> Optional[Any]:
	found = _downward(tree, node, test, True, 0)
	return found[0] if found else None
