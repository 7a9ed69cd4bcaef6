import unittest

from simplify import syntax, synthesis, validation
from simplify.errors import SynthesisFailed
from simplify.options import DEFAULT, Options
from simplify.synthesis import Value
from simplify.syntax import Arrow

def _event() -> syntax.Tree:
	b = syntax.TreeBuilder()
	with b.enum("Event"):
		b.case("one", "String")
		b.case("two", "Int")
		b.case("three", "Struct")
		b.case("four")
	return b.tree()

def _synthesize(tree, options=DEFAULT) -> synthesis.Synthesis:
	return synthesis.synthesize(tree, validation.survey(tree, tree.root, options), options)

class SimplifiedTypeTests(unittest.TestCase):

	def setUp(self) -> None:
		self.result = _synthesize(_event())

	def test_same_cases_same_order(self):
		self.assertEqual(["one", "two", "three", "four"], self.result.simplified.names())
		self.assertEqual(["one", "two", "three", "four"], [m.name for m in self.result.enum])

	def test_one_arm_per_case(self):
		arms = self.result.projection.arms
		self.assertEqual(["one", "two", "three", "four"], [a.tag for a in arms])
		self.assertEqual([a.tag for a in arms], [a.target for a in arms])

	def test_declaration_text(self):
		simplified, projection = self.result.declarations
		self.assertEqual(
			"enum Simplified: Int, CaseIterable, Hashable {\n"
			"    case one   // String\n"
			"    case two   // Int\n"
			"    case three // Struct\n"
			"    case four  //  -- has no associated type\n"
			"}",
			simplified.source,
		)
		self.assertEqual(
			"var simplified: Simplified {\n"
			"    switch self {\n"
			"    case .one:\n"
			"        return Simplified.one   // String\n"
			"    case .two:\n"
			"        return Simplified.two   // Int\n"
			"    case .three:\n"
			"        return Simplified.three // Struct\n"
			"    case .four:\n"
			"        return Simplified.four  //  -- has no associated type\n"
			"    }\n"
			"}",
			projection.source,
		)

	def test_declarations_are_trees(self):
		simplified, projection = self.result.declarations
		self.assertIsInstance(simplified.root, syntax.EnumDecl)
		self.assertEqual("Simplified", simplified.name_of(simplified.root))
		arms = [n for n in projection.nodes if isinstance(n, syntax.SwitchCase)]
		self.assertEqual(4, len(arms))

	def test_plain_output(self):
		result = _synthesize(_event(), Options(annotate=False))
		self.assertNotIn("//", result.declarations[0].source)
		self.assertIn("\n    case three\n", result.declarations[0].source)

	def test_unaligned_output(self):
		result = _synthesize(_event(), Options(align=False))
		self.assertIn("\n    case one // String\n", result.declarations[0].source)

	def test_other_names(self):
		result = _synthesize(_event(), Options(type_name="Kind", projection_name="kind", conformances=("Hashable",)))
		self.assertTrue(result.declarations[0].source.startswith("enum Kind: Hashable {\n"))
		self.assertTrue(result.declarations[1].source.startswith("var kind: Kind {\n"))


class UnderscoreNameTests(unittest.TestCase):

	def test_underscored_case_names_project(self):
		b = syntax.TreeBuilder()
		with b.enum("Odd"):
			b.case("_a_", "Int")
			b.case("__b__")
			b.case("__c")
			b.case("_")
			b.case("plain", "String")
		result = _synthesize(b.tree())
		tags = ["_a_", "__b__", "__c", "_", "plain"]
		self.assertEqual(tags, [m.value for m in result.enum])
		for tag in tags:
			with self.subTest(tag):
				self.assertEqual(tag, result.project(Value(tag, (1,))).value)
		self.assertIs(result.enum.plain, result.project(Value("plain", ("x",))))
		self.assertIn("\n    case _a_   // Int\n", result.declarations[0].source)

	def test_member_names(self):
		self.assertEqual("plain", synthesis.member_name("plain"))
		self.assertEqual("_a____", synthesis.member_name("_a_"))


class ProjectionTests(unittest.TestCase):

	def setUp(self) -> None:
		self.result = _synthesize(_event())

	def test_payload_is_ignored(self):
		project = self.result.project
		self.assertEqual(project(Value("one", ("hello",))), project(Value("one", ("goodbye",))))
		self.assertEqual(hash(project(Value("two", (1,)))), hash(project(Value("two", (2,)))))
		self.assertNotEqual(project(Value("one", ("x",))), project(Value("two", (1,))))
		self.assertIs(self.result.enum.four, project(Value("four")))

	def test_every_tag_lands_somewhere(self):
		for member in self.result.enum:
			self.assertIs(member, self.result.project(Value(member.name, ("anything",))))

	def test_unknown_tag(self):
		with self.assertRaises(ValueError):
			self.result.project(Value("five"))

	def test_usable_as_keys(self):
		counts = {}
		for v in [Value("one", ("a",)), Value("two", (1,)), Value("one", ("b",))]:
			key = self.result.project(v)
			counts[key] = counts.get(key, 0) + 1
		self.assertEqual({self.result.enum.one: 2, self.result.enum.two: 1}, counts)


class AliasTests(unittest.TestCase):

	def test_aliases_come_first(self):
		b = syntax.TreeBuilder()
		with b.enum("Sorting"):
			b.case("custom", Arrow(("X", "Y"), "Bool"))
			b.case("named", "FunctionAlias")
			b.case("reverse", Arrow(("Y", "X"), "Bool"))
			b.case("none")
		result = _synthesize(b.tree())
		sources = [d.source for d in result.declarations]
		self.assertEqual("typealias AnonymousFunc_0 = (X, Y) -> Bool", sources[0])
		self.assertEqual("typealias AnonymousFunc_1 = (Y, X) -> Bool", sources[1])
		self.assertIn("case custom  // AnonymousFunc_0\n", sources[2])
		self.assertIn("case named   // FunctionAlias\n", sources[2])
		self.assertIn("return Simplified.reverse // AnonymousFunc_1\n", sources[3])
		self.assertEqual(4, len(sources))

	def test_alias_keeps_the_function_shape(self):
		b = syntax.TreeBuilder()
		with b.enum("Sorting"):
			b.case("custom", Arrow(("X", "Y"), "Bool"))
		alias = _synthesize(b.tree()).declarations[0]
		self.assertIsInstance(alias.root, syntax.TypeAliasDecl)
		[function] = [n for n in alias.nodes if isinstance(n, syntax.FunctionType)]
		self.assertEqual(alias.root.index, function.parent)
		self.assertEqual("(X, Y) -> Bool", alias.describe(function))


class HelperTests(unittest.TestCase):

	def test_helper_is_off_by_default(self):
		self.assertEqual(2, len(_synthesize(_event()).declarations))

	def test_helper(self):
		result = _synthesize(_event(), Options(equality_helper=True))
		self.assertEqual(
			"func isEqualSimplified(_ other: Self) -> Bool {\n"
			"    return self.simplified == other.simplified\n"
			"}",
			result.declarations[-1].source,
		)


class FailureTests(unittest.TestCase):

	def test_duplicate_names(self):
		b = syntax.TreeBuilder()
		with b.enum("Event"):
			b.case("a", "Int")
			b.case("a", "String")
		with self.assertRaises(SynthesisFailed) as ctx:
			_synthesize(b.tree())
		self.assertEqual("Event", ctx.exception.name)

	def test_nameless_case(self):
		b = syntax.TreeBuilder()
		with b.enum("Event"):
			b.case("a", "Int")
			b.line_break()
			with b.node(syntax.CaseDecl):
				b.token(syntax.Keyword, "case")
				with b.node(syntax.CaseElement):
					pass
		with self.assertRaises(SynthesisFailed):
			_synthesize(b.tree())


if __name__ == '__main__':
	unittest.main()
