"""
Turning refusals into something a person can act on.

Every refusal becomes a Diagnostic with a stable message and a picture of the
offending source. Where the correction is mechanical, the diagnostic also
carries a fix-it: a suggested rewrite the host may show or offer. Nothing
here ever applies one.
"""
import sys, random
from typing import NamedTuple, Optional, Sequence
from boozetools.support.failureprone import SourceText, illustration, Severity
from boozetools.support.foundation import Visitor

from . import syntax
from .errors import (
	ErrorKind, Refusal, NotASumType, AlreadySimplified, NoPayloadedVariant,
	MultiplePayloadGroupsInVariant, UnclearVariantName, SynthesisFailed,
)
from .location import Span, span_of, cover
from .options import Options

# Fix-its draw payload types from here, round-robin, when they need to make some up.
PLACEHOLDER_TYPES = ("Int", "String", "Bool", "Double")

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]
	minced_oaths = ['Drat', 'Fiddlesticks', 'Good Grief', 'Nuts', 'Rats', 'Curses', 'Crikey']
	resignations = [
		'I cannot simplify that.',
		'The enum stays as it is.',
		'I need to ask for help.',
	]
	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))


class Edit(NamedTuple):
	span: Span
	replacement: str

class FixIt(NamedTuple):
	message: str
	edits: tuple[Edit, ...]

	def preview(self, source:str) -> str:
		""" What the source would read if someone took the advice """
		for edit in sorted(self.edits, key=lambda e: e.span.slice.start, reverse=True):
			s = edit.span.slice
			source = source[:s.start] + edit.replacement + source[s.stop:]
		return source

class Annotation:
	path: Optional[str]
	slice: slice
	caption: str
	def __init__(self, tree:syntax.Tree, node:syntax.Node, caption:str=""):
		self.path = str(tree.path) if tree.path is not None else None
		self.slice = slice(node.start, node.stop)
		self.caption = caption
		self._text = tree.source
	def illustrate(self) -> str:
		if not self._text:
			return self.caption
		source = SourceText(self._text, filename=self.path)
		row, col = source.find_row_col(self.slice.start)
		single_line = source.line_of_text(row)
		width = max(1, min(self.slice.stop - self.slice.start, len(single_line.rstrip()) - col))
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Diagnostic(NamedTuple):
	kind: ErrorKind
	severity: Severity
	message: str
	span: Span
	fixit: Optional[FixIt]
	picture: str

	def as_text(self) -> str:
		lines = [self.message, ""]
		if self.span.path is not None:
			lines.append(str(self.span.path))
		if self.picture:
			lines.append(self.picture)
		if self.fixit is not None:
			lines.append("Suggestion: " + self.fixit.message)
			for edit in self.fixit.edits:
				lines.append("    " + edit.replacement.replace("\n", "\n    "))
		return '\n'.join(lines)


class Diagnostician(Visitor):
	""" One method per kind of refusal; each returns the Diagnostic to report. """

	def __init__(self, tree:syntax.Tree, options:Options):
		self._tree = tree
		self._options = options

	def _diagnose(self, refusal:Refusal, message:str, caption:str, fixit:Optional[FixIt]=None, node=None) -> Diagnostic:
		node = refusal.culprit if node is None else node
		picture = Annotation(self._tree, node, caption).illustrate()
		return Diagnostic(refusal.kind, Severity.ERROR, message, span_of(self._tree, node), fixit, picture)

	def _name(self, node:syntax.Node) -> str:
		return self._tree.name_of(node) or "this declaration"

	def visit_NotASumType(self, ex:NotASumType) -> Diagnostic:
		decl = ex.culprit
		message = "Only an enum can be simplified. (The enum must have at least one case with an associated value.)"
		keyword = self._first_keyword(decl)
		span = span_of(self._tree, decl) if keyword is None else cover(self._tree, keyword, decl)
		fixit = FixIt(
			"Declare %s as an enum with cases that carry values." % self._name(decl),
			(Edit(span, _two_case_enum(self._tree.name_of(decl) or "Unnamed")),),
		)
		return self._diagnose(ex, message, "not an enum", fixit)

	def visit_AlreadySimplified(self, ex:AlreadySimplified) -> Diagnostic:
		name = self._options.type_name
		message = 'Cannot simplify %s: a member named "%s" is already declared inside it.' % (self._name(ex.culprit), name)
		fixit = None
		token = self._tree.name_token(ex.member)
		if token is not None:
			fresh = _rename_clear_of(token.text, ex.taken)
			fixit = FixIt(
				'Rename the existing "%s" to "%s".' % (token.text, fresh),
				(Edit(span_of(self._tree, token), fresh),),
			)
		return self._diagnose(ex, message, "already declared", fixit, node=ex.member)

	def visit_NoPayloadedVariant(self, ex:NoPayloadedVariant) -> Diagnostic:
		message = "Only an enum with at least one case carrying an associated value can be simplified."
		edits = []
		for i, element in enumerate(ex.elements):
			token = self._tree.name_token(element)
			if token is None: continue
			placeholder = PLACEHOLDER_TYPES[i % len(PLACEHOLDER_TYPES)]
			span = Span(self._tree.path, slice(token.stop, element.stop))
			edits.append(Edit(span, "(%s)" % placeholder))
		fixit = FixIt("Give each case an associated value.", tuple(edits)) if edits else None
		return self._diagnose(ex, message, "no case carries a value", fixit)

	def visit_MultiplePayloadGroupsInVariant(self, ex:MultiplePayloadGroupsInVariant) -> Diagnostic:
		message = "Cannot simplify: case .%s has more than one associated value type: %s." % (ex.variant_name, ", ".join(ex.groups))
		return self._diagnose(ex, message, "one associated type per case, please")

	def visit_UnclearVariantName(self, ex:UnclearVariantName) -> Diagnostic:
		message = "Cannot simplify: no clear case name for the associated types in: %s." % ex.raw_text
		return self._diagnose(ex, message, "which case is this?")

	def visit_SynthesisFailed(self, ex:SynthesisFailed) -> Diagnostic:
		message = "Failed creating a simplified enum for %s: %s." % (ex.name, ex.reason)
		return self._diagnose(ex, message, "")

	def _first_keyword(self, node:syntax.Node) -> Optional[syntax.Keyword]:
		for child in self._tree.children_of(node):
			if isinstance(child, syntax.Keyword):
				return child


def _two_case_enum(name:str) -> str:
	b = syntax.TreeBuilder()
	with b.enum(name):
		b.case("first", PLACEHOLDER_TYPES[0])
		b.case("second", PLACEHOLDER_TYPES[1])
	return b.tree().source

def _rename_clear_of(name:str, taken:frozenset[str]) -> str:
	fresh = "old_" + name
	while fresh in taken:
		fresh = "old_" + fresh
	return fresh


class Report:
	""" Collects diagnostics across however many expansions a host cares to run. """
	_issues : list[Diagnostic]

	def __init__(self, *, verbose:int=0, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def issues(self) -> Sequence[Diagnostic]: return tuple(self._issues)

	def issue(self, it:Diagnostic):
		self._issues.append(it)
		if len(self._issues) >= self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def refused(self, tree:syntax.Tree, refusal:Refusal, options:Options) -> Diagnostic:
		""" Record a refusal. Refusals do not count against max_issues. """
		diagnostic = Diagnostician(tree, options).visit(refusal)
		self.info("Refused:", diagnostic.kind.value)
		self._issues.append(diagnostic)
		return diagnostic

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
