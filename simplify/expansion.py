"""
The one entry point a host needs: hand over a declaration, get back either
the declarations to splice into it or the diagnostics explaining why not.

Refusals are caught here and nowhere else. A RecursionTooDeep goes straight
through: the snapshot is broken, and no answer computed from it is worth having.
"""
from typing import NamedTuple, Optional
from . import syntax
from .diagnostics import Diagnostic, Report
from .errors import Refusal
from .options import Options, DEFAULT
from .query import all_children
from .synthesis import Synthesis, synthesize
from .validation import survey

class GenerationResult(NamedTuple):
	declarations: tuple[syntax.Tree, ...] = ()
	diagnostics: tuple[Diagnostic, ...] = ()
	synthesis: Optional[Synthesis] = None

	@property
	def ok(self) -> bool: return bool(self.declarations)

	def source(self) -> str:
		""" The declarations as text, ready to paste into the body of the original """
		return "\n\n".join(d.source for d in self.declarations)

def _result(declarations=(), diagnostics=(), synthesis=None) -> GenerationResult:
	assert bool(declarations) != bool(diagnostics), "Exactly one of declarations or diagnostics, please."
	return GenerationResult(tuple(declarations), tuple(diagnostics), synthesis)

def expand(tree:syntax.Tree, decl:Optional[syntax.Node]=None, *, options:Options=DEFAULT, report:Optional[Report]=None) -> GenerationResult:
	if decl is None:
		decl = tree.root
	if report is None:
		report = Report()
	try:
		found = survey(tree, decl, options)
		report.info("Expanding %s: %d case(s), %d with associated values." % (
			found.name, len(found.variants), sum(v.signature is not None for v in found.variants)
		))
		synthesis = synthesize(tree, found, options)
	except Refusal as ex:
		return _result(diagnostics=[report.refused(tree, ex, options)])
	return _result(declarations=synthesis.declarations, synthesis=synthesis)

def annotated_declarations(tree:syntax.Tree, attribute:str) -> list[syntax.Declaration]:
	""" Every declaration in the tree bearing the given attribute, outermost first """
	return all_children(tree, tree.root, lambda node, depth: (
		isinstance(node, syntax.Declaration) and attribute in tree.attributes_of(node)
	))

def expand_annotated(tree:syntax.Tree, *, options:Options=DEFAULT, report:Optional[Report]=None) -> list[tuple[syntax.Declaration, GenerationResult]]:
	""" What a host does with a whole file: expand each annotated declaration independently. """
	if report is None:
		report = Report()
	return [
		(decl, expand(tree, decl, options=options, report=report))
		for decl in annotated_declarations(tree, options.attribute)
	]
