"""
Reduce each variant's payload clause to one canonical signature.

A signature is one of:
	None               -- the variant carries nothing (or nothing with a name)
	NamedPayload       -- it carries a value of some named type
	SynthesizedAlias   -- it carries an anonymous function type, which gets
	                      a made-up name and an alias declaration to go with it

Only identifier types and function types contribute. Tuples, arrays and the
like have no name to report, so a slot holding one contributes nothing.
Each slot is a payload group of its own, so a variant with two named slots
is refused rather than folded into some composite name.
"""
from typing import NamedTuple, Optional, Union
from boozetools.support.foundation import Visitor
from . import syntax
from .errors import MultiplePayloadGroupsInVariant, UnclearVariantName
from .query import first_parent

NO_PAYLOAD_NOTE = " -- has no associated type"

class NamedPayload(NamedTuple):
	name: str

class SynthesizedAlias(NamedTuple):
	name: str
	function: syntax.FunctionType

PayloadSignature = Optional[Union[NamedPayload, SynthesizedAlias]]

def note(signature:PayloadSignature) -> str:
	""" What the generated comments say about a variant's payload """
	return NO_PAYLOAD_NOTE if signature is None else signature.name


class AliasDecl(NamedTuple):
	name: str
	function: syntax.FunctionType

class AliasPool:
	""" Hands out fresh alias names in first-seen order, one pool per declaration. """
	def __init__(self, prefix:str):
		self._prefix = prefix
		self.aliases: list[AliasDecl] = []

	def fresh(self, function:syntax.FunctionType) -> str:
		name = "%s%d" % (self._prefix, len(self.aliases))
		self.aliases.append(AliasDecl(name, function))
		return name


class SlotClassifier(Visitor):
	""" What (if anything) a single payload slot's type contributes """
	def __init__(self, tree:syntax.Tree, pool:AliasPool):
		self._tree = tree
		self._pool = pool

	def visit_IdentifierType(self, node:syntax.IdentifierType):
		name = self._tree.name_of(node)
		if name is not None:
			return NamedPayload(name)

	def visit_FunctionType(self, node:syntax.FunctionType):
		return SynthesizedAlias(self._pool.fresh(node), node)

	def visit_TupleType(self, node:syntax.TupleType): return None
	def visit_OtherType(self, node:syntax.OtherType): return None


def well_parenthesized(tree:syntax.Tree, clause:syntax.ParameterClause) -> bool:
	children = tree.children_of(clause)
	return (
		len(children) >= 2
		and isinstance(children[0], syntax.Punct) and children[0].text == "("
		and isinstance(children[-1], syntax.Punct) and children[-1].text == ")"
	)

def _slot_type(tree:syntax.Tree, parameter:syntax.Parameter) -> Optional[syntax.TypeNode]:
	for child in tree.children_of(parameter):
		if isinstance(child, syntax.TypeNode):
			return child

def _raw_case_text(tree:syntax.Tree, element:syntax.CaseElement) -> str:
	owner = first_parent(tree, element, lambda node, depth: isinstance(node, syntax.CaseDecl))
	return tree.describe(owner or element).strip()

def extract(tree:syntax.Tree, element:syntax.CaseElement, pool:AliasPool) -> PayloadSignature:
	"""
	Classify the slots of one case element.
	Raises a refusal when the payload cannot be pinned to one named type.
	"""
	classifier = SlotClassifier(tree, pool)
	groups = {}
	slot_text = {}
	name = None
	for child in tree.children_of(element):
		if isinstance(child, syntax.Name):
			name = child.text.strip() or None
		elif isinstance(child, syntax.ParameterClause) and well_parenthesized(tree, child):
			slots = [c for c in tree.children_of(child) if isinstance(c, syntax.Parameter)]
			for position, slot in enumerate(slots):
				slot_type = _slot_type(tree, slot)
				if slot_type is None: continue
				found = classifier.visit(slot_type)
				if found is not None:
					key = child.index, position
					groups[key] = found
					slot_text[key] = tree.describe(slot)
	if not groups:
		return None
	if name is None:
		raise UnclearVariantName(element, _raw_case_text(tree, element))
	if len(groups) > 1:
		raise MultiplePayloadGroupsInVariant(element, name, tuple(slot_text.values()))
	return next(iter(groups.values()))
