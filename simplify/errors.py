"""
The closed set of reasons to refuse a declaration.

A refusal is raised where the trouble is noticed and caught once, at the
expansion boundary, which hands it to the diagnostics to become something
a person can read. RecursionTooDeep is the exception to the rule: it means
the snapshot itself is broken, so it is never caught on the way out.
"""
from enum import Enum
from .syntax import Node

class ErrorKind(Enum):
	NOT_A_SUM_TYPE = "NotASumType"
	ALREADY_SIMPLIFIED = "AlreadySimplified"
	NO_PAYLOADED_VARIANT = "NoPayloadedVariant"
	MULTIPLE_PAYLOAD_GROUPS = "MultiplePayloadGroupsInVariant"
	UNCLEAR_VARIANT_NAME = "UnclearVariantName"
	RECURSION_TOO_DEEP = "RecursionTooDeep"
	SYNTHESIS_FAILED = "SynthesisFailed"

class Refusal(Exception):
	"""
	The first argument is always the node most to blame.
	Subclasses add whatever else the diagnostic will want to say.
	"""
	kind: ErrorKind
	culprit: Node

	def __init__(self, culprit:Node, *args):
		super().__init__(culprit, *args)
		self.culprit = culprit

class NotASumType(Refusal):
	kind = ErrorKind.NOT_A_SUM_TYPE

class AlreadySimplified(Refusal):
	kind = ErrorKind.ALREADY_SIMPLIFIED
	def __init__(self, decl:Node, member:Node, taken:frozenset[str]):
		super().__init__(decl, member, taken)
		self.member = member
		self.taken = taken  # Every name declared directly inside, cases included, for picking a new one.

class NoPayloadedVariant(Refusal):
	kind = ErrorKind.NO_PAYLOADED_VARIANT
	def __init__(self, decl:Node, elements:tuple[Node, ...]):
		super().__init__(decl, elements)
		self.elements = elements

class MultiplePayloadGroupsInVariant(Refusal):
	kind = ErrorKind.MULTIPLE_PAYLOAD_GROUPS
	def __init__(self, element:Node, variant_name:str, groups:tuple[str, ...]):
		super().__init__(element, variant_name, groups)
		self.variant_name = variant_name
		self.groups = groups

class UnclearVariantName(Refusal):
	kind = ErrorKind.UNCLEAR_VARIANT_NAME
	def __init__(self, element:Node, raw_text:str):
		super().__init__(element, raw_text)
		self.raw_text = raw_text

class SynthesisFailed(Refusal):
	kind = ErrorKind.SYNTHESIS_FAILED
	def __init__(self, decl:Node, name:str, reason:str):
		super().__init__(decl, name, reason)
		self.name = name
		self.reason = reason
