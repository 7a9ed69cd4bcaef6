import unittest

from simplify import syntax, validation
from simplify.errors import NotASumType, AlreadySimplified, NoPayloadedVariant, MultiplePayloadGroupsInVariant
from simplify.options import DEFAULT, Options
from simplify.payload import NamedPayload

def _survey(tree, options=DEFAULT):
	return validation.survey(tree, tree.root, options)

class GateTests(unittest.TestCase):

	def test_product_type_is_not_a_sum_type(self):
		b = syntax.TreeBuilder()
		with b.struct("Point"):
			b.field("var", "x", "Int")
			b.field("var", "y", "Int")
		with self.assertRaises(NotASumType):
			_survey(b.tree())

	def test_nested_simplified_is_refused(self):
		b = syntax.TreeBuilder()
		with b.enum("Event"):
			b.case("one", "String")
			with b.struct("Simplified"): pass
			with b.enum("Other"): pass
		with self.assertRaises(AlreadySimplified) as ctx:
			_survey(b.tree())
		self.assertEqual("Simplified", b.tree().name_of(ctx.exception.member))
		self.assertEqual(frozenset({"Simplified", "Other", "one"}), ctx.exception.taken)

	def test_nested_property_is_a_clash(self):
		b = syntax.TreeBuilder()
		with b.enum("Event"):
			b.case("one", "String")
			b.field("var", "Simplified", "Int")
		tree = b.tree()
		with self.assertRaises(AlreadySimplified) as ctx:
			_survey(tree)
		self.assertIsInstance(ctx.exception.member, syntax.VarDecl)
		self.assertEqual(frozenset({"Simplified", "one"}), ctx.exception.taken)

	def test_nested_function_is_a_clash(self):
		b = syntax.TreeBuilder()
		with b.enum("Event"):
			b.case("one", "String")
			b.line_break()
			with b.node(syntax.FuncDecl):
				b.token(syntax.Keyword, "func")
				b.space()
				b.token(syntax.Name, "Simplified")
		with self.assertRaises(AlreadySimplified) as ctx:
			_survey(b.tree())
		self.assertIsInstance(ctx.exception.member, syntax.FuncDecl)

	def test_clash_outranks_missing_payloads(self):
		b = syntax.TreeBuilder()
		with b.enum("Event"):
			b.case("one")
			b.typealias("Simplified", "Int")
		with self.assertRaises(AlreadySimplified):
			_survey(b.tree())

	def test_deeper_simplified_is_no_clash(self):
		b = syntax.TreeBuilder()
		with b.enum("Event"):
			b.case("one", "String")
			with b.struct("Inner"):
				with b.enum("Simplified"):
					b.case("x")
		found = _survey(b.tree())
		self.assertEqual(["one"], [v.name for v in found.variants])

	def test_clash_follows_the_configured_name(self):
		b = syntax.TreeBuilder()
		with b.enum("Event"):
			b.case("one", "String")
			with b.enum("Simplified"): pass
		found = _survey(b.tree(), Options(type_name="Tag"))
		self.assertEqual("Event", found.name)

	def test_no_payloads(self):
		b = syntax.TreeBuilder()
		with b.enum("Flags"):
			b.case("a")
			b.cases("b", "c")
		with self.assertRaises(NoPayloadedVariant) as ctx:
			_survey(b.tree())
		self.assertEqual(3, len(ctx.exception.elements))

	def test_extractor_refusal_outranks_missing_payloads(self):
		b = syntax.TreeBuilder()
		with b.enum("Event"):
			b.case("a")
			b.case("b", "Int", "Int")
		with self.assertRaises(MultiplePayloadGroupsInVariant):
			_survey(b.tree())

	def test_variants_in_order(self):
		b = syntax.TreeBuilder()
		with b.enum("Event"):
			b.case("one", "String")
			b.cases("two", ("three", "Int"))
			with b.enum("Nested"):
				b.case("ignored", "Int")
			b.case("four")
		found = _survey(b.tree())
		self.assertEqual(["one", "two", "three", "four"], [v.name for v in found.variants])
		self.assertEqual([0, 1, 2, 3], [v.ordinal for v in found.variants])
		self.assertEqual(
			[NamedPayload("String"), None, NamedPayload("Int"), None],
			[v.signature for v in found.variants],
		)
		self.assertEqual((), found.aliases)

	def test_owner_skips_the_node_itself(self):
		b = syntax.TreeBuilder()
		with b.enum("Outer"):
			with b.enum("Inner"):
				b.case("x")
		tree = b.tree()
		inner = [n for n in tree.nodes if isinstance(n, syntax.EnumDecl)][1]
		self.assertEqual("Outer", tree.name_of(validation.owner(tree, inner)))
		self.assertIsNone(validation.owner(tree, tree.root))


if __name__ == '__main__':
	unittest.main()
