import math
import sys
import unittest

from scrawl import syntax, sharing
from scrawl.front_end import parse_text
from scrawl.evaluator import evaluate, invoke
from scrawl import location
from scrawl.executive import execute
from scrawl.machine import Machine, StackUnderflow, TypeMismatch, InvalidOperand, IndexOutOfRange, TooDeep
from scrawl.primitive import BUILTINS, catalog
from scrawl.adapters.for_test_purposes import RecordingSurface, NullSurface

C = syntax.Constant

def _machine(width=100, height=100):
	return Machine(RecordingSurface(), width, height, BUILTINS)

def _run(text, machine=None):
	machine = machine or _machine()
	evaluate(parse_text(text), machine)
	return machine

def _texts(machine):
	return [str(v) for v in machine.stack]

class TokenizerTests(unittest.TestCase):

	def test_one_block(self):
		program = parse_text("[ 1 2 ]")
		self.assertEqual(1, len(program))
		block = program[0]
		self.assertIsInstance(block, syntax.Block)
		self.assertEqual([C("1"), C("2")], list(block))

	def test_nesting(self):
		program = parse_text("1 [ 2 [ 3 ] ]")
		self.assertEqual(C("1"), program[0])
		inner = program[1][1]
		self.assertIsInstance(inner, syntax.Block)
		self.assertEqual(syntax.Block([C("3")]), inner)

	def test_empty_block(self):
		self.assertEqual(syntax.Block([syntax.Block([])]), parse_text("[ ]"))

	def test_unterminated_block_closes_at_the_end(self):
		self.assertEqual(syntax.Block([syntax.Block([C("1"), C("2")])]), parse_text("[ 1 2"))

	def test_stray_closer_ends_the_program(self):
		self.assertEqual(syntax.Block([C("1")]), parse_text("1 ] 2 3"))

	def test_whitespace(self):
		self.assertEqual(["a", "b", "c"], [v.text for v in parse_text("\ta\r\nb   c\n")])
		self.assertEqual(1, len(parse_text("a\x0bb")), "Only space, tab, CR and LF separate words.")
		self.assertEqual(0, len(parse_text(" \n\t ")))

	def test_brackets_need_whitespace(self):
		program = parse_text("[1 2]")
		self.assertEqual([C("[1"), C("2]")], list(program))

	def test_no_resolution_while_reading(self):
		program = parse_text("1 2 + f")
		self.assertTrue(all(isinstance(v, syntax.Constant) for v in program))

	def test_words_know_where_they_came_from(self):
		program = parse_text("1 [ 2 ]")
		self.assertTrue(program[0].is_located())
		self.assertTrue(program[1].is_located())
		self.assertFalse(C.of_number(3).is_located())

	def test_deep_nesting(self):
		depth = 5000
		for text in ["[ "*depth + "x" + " ]"*depth, "[ "*depth + "x"]:
			with self.subTest(text[-4:]):
				block = parse_text(text)
				for _ in range(depth):
					self.assertEqual(1, len(block))
					block = block[0]
				self.assertEqual(C("x"), block)

class ValueTests(unittest.TestCase):

	def test_parse_number(self):
		self.assertEqual(12, syntax.parse_number("12px"))
		self.assertEqual(0.5, syntax.parse_number(".5"))
		self.assertEqual(-1000, syntax.parse_number("-1e3"))
		self.assertEqual(math.inf, syntax.parse_number("Infinity"))
		for text in ("abc", "", "-", "e5", "nan", "inf"):
			with self.subTest(text):
				self.assertTrue(math.isnan(syntax.parse_number(text)))

	def test_number_text(self):
		self.assertEqual("3", syntax.number_text(3.0))
		self.assertEqual("2.5", syntax.number_text(2.5))
		self.assertEqual("-7", syntax.number_text(-7.0))
		self.assertEqual("NaN", syntax.number_text(math.nan))
		self.assertEqual("-Infinity", syntax.number_text(-math.inf))

	def test_computed_constant_keeps_its_number(self):
		c = C.of_number(0.1 + 0.2)
		self.assertEqual(0.1 + 0.2, c.numeric())

	def test_truthiness(self):
		self.assertTrue(C("1").is_truthy())
		self.assertTrue(C("yes").is_truthy())
		self.assertFalse(C("0").is_truthy())
		self.assertFalse(C("0.0").is_truthy())
		self.assertFalse(C("").is_truthy())
		self.assertFalse(C.of_number(0).is_truthy())

	def test_blocks_are_immutable(self):
		a = syntax.Block([C("1")])
		b = a.append(C("2"))
		self.assertEqual(1, len(a))
		self.assertEqual(syntax.Block([C("1"), C("2")]), b)
		self.assertEqual(syntax.Block([C("0"), C("1")]), a.prepend(C("0")))
		self.assertEqual(syntax.Block([C("1"), C("1")]), a + a)

	def test_rendering(self):
		self.assertEqual("[ 1 [ 2 ] + ]", str(syntax.Block([C("1"), syntax.Block([C("2")]), BUILTINS["+"]])))

class ResolverTests(unittest.TestCase):

	def test_builtin_wins(self):
		m = _machine()
		m.dict["f"] = C("5")
		self.assertIs(BUILTINS["f"], m.resolve(C("f")))

	def test_dictionary_beats_literal(self):
		m = _machine()
		m.dict["n"] = syntax.Block([])
		self.assertEqual(syntax.Block([]), m.resolve(C("n")))

	def test_unknown_word_is_itself(self):
		word = C("nowhere")
		self.assertIs(word, _machine().resolve(word))

	def test_only_constants_resolve(self):
		m = _machine()
		block = syntax.Block([C("f")])
		m.dict[str(block)] = C("oops")
		self.assertIs(block, m.resolve(block))
		self.assertIs(BUILTINS["+"], m.resolve(BUILTINS["+"]))

	def test_late_definitions_are_seen(self):
		m = _machine()
		program = parse_text("n 7 n : n")
		evaluate(program, m)
		self.assertEqual(["n", "7"], _texts(m))

class ArithmeticTests(unittest.TestCase):

	def test_numbers(self):
		for a, b in [(7, 5), (2.5, 0.5), (-3, 8), (0, 0), (1e3, 1e-3)]:
			with self.subTest(a=a, b=b):
				for op, expect in (("+", a + b), ("*", a * b), ("-", a - b)):
					m = _run("%r %r %s" % (a, b, op))
					self.assertEqual(1, len(m.stack))
					self.assertEqual(expect, m.stack[0].numeric())

	def test_pop_order(self):
		self.assertEqual(["2"], _texts(_run("5 3 -")))

	def test_not_a_number_propagates(self):
		self.assertEqual(["NaN"], _texts(_run("abc 1 +")))
		self.assertEqual(["NaN"], _texts(_run("[ 1 ] 2 *")))

	def test_sum_with_blocks(self):
		self.assertEqual(syntax.Block([C("1"), C("2")]), _run("[ 1 ] 2 +").stack[0])
		self.assertEqual(syntax.Block([C("0"), C("1")]), _run("0 [ 1 ] +").stack[0])
		self.assertEqual(syntax.Block([C("1"), C("2")]), _run("[ 1 ] [ 2 ] +").stack[0])

	def test_sum_with_an_operator(self):
		with self.assertRaises(TypeMismatch):
			_run("[ f ] x 1 +")

	def test_minus_does_not_join_blocks(self):
		self.assertEqual(["NaN"], _texts(_run("[ 1 ] [ 2 ] -")))

class StackTests(unittest.TestCase):

	def test_define_round_trip(self):
		for value in ("5", "hello", "-2.5"):
			with self.subTest(value):
				m = _run("%s n :" % value)
				_run("n", m)
				self.assertEqual([C(value)], m.stack)

	def test_redefine(self):
		self.assertEqual(["6"], _texts(_run("5 n : 6 n : n")))

	def test_define_a_block(self):
		m = _run("[ 2 3 * ] six : six")
		self.assertEqual(syntax.Block([C("2"), C("3"), C("*")]), m.stack[0])
		_run("!", m)
		self.assertEqual(["6"], _texts(m))

	def test_rebind_an_operator(self):
		self.assertEqual(["6"], _texts(_run("[ * ] x times : 2 3 times")))

	def test_definition_needs_a_word(self):
		with self.assertRaises(TypeMismatch):
			_run("1 [ 2 ] :")

	def test_duplicate(self):
		m = _run("4 .")
		self.assertEqual(2, len(m.stack))
		self.assertEqual(m.stack[0], m.stack[1])
		with self.assertRaises(StackUnderflow):
			_run(".")

	def test_expand(self):
		self.assertEqual(["1", "2", "[ 3 ]"], _texts(_run("[ 1 2 [ 3 ] ] x")))
		with self.assertRaises(TypeMismatch):
			_run("5 x")

	def test_each_preserves_order(self):
		m = _run("[ 1 2 3 ] [ ] e")
		self.assertEqual(["1", "2", "3"], _texts(m))
		self.assertEqual(["6"], _texts(_run("0 [ 1 2 3 ] [ + ] e")))

	def test_each_needs_a_block_of_items(self):
		with self.assertRaises(TypeMismatch):
			_run("5 [ ] e")

	def test_zip_truncates(self):
		m = _run("[ 1 2 3 ] [ 4 5 6 7 8 ] z")
		pairs = m.stack[0]
		self.assertEqual(3, len(pairs))
		self.assertEqual(syntax.Block([C("1"), C("4")]), pairs[0])
		self.assertEqual(syntax.Block([C("3"), C("6")]), pairs[2])

	def test_apply(self):
		self.assertEqual(["6"], _texts(_run("[ 2 3 * ] !")))
		self.assertEqual(["6"], _texts(_run("2 3 [ * ] x !")))
		with self.assertRaises(TypeMismatch):
			_run("5 !")

	def test_invoke_constant(self):
		with self.assertRaises(TypeMismatch):
			invoke(C("7"), _machine())

class IndexTests(unittest.TestCase):

	def test_block(self):
		self.assertEqual(["20"], _texts(_run("[ 10 20 30 ] 1 i")))
		self.assertEqual(["20"], _texts(_run("[ 10 20 30 ] 1.7 i")))

	def test_block_out_of_range(self):
		for index in ("3", "-1", "abc"):
			with self.subTest(index):
				with self.assertRaises(IndexOutOfRange):
					_run("[ 10 20 30 ] %s i" % index)

	def test_digits(self):
		self.assertEqual(["3"], _texts(_run("123 0 i")))
		self.assertEqual(["1"], _texts(_run("123 2 i")))
		self.assertEqual(["0"], _texts(_run("123 3 i")))
		self.assertEqual(["2"], _texts(_run("12.9 0 i")))
		self.assertEqual(["4"], _texts(_run("6 7 * 1 i")))

	def test_digits_of_a_defined_name(self):
		self.assertEqual(["5"], _texts(_run("45 n : n 0 i")))

	def test_digits_of_nonsense(self):
		with self.assertRaises(InvalidOperand):
			_run("abc 0 i")

	def test_index_an_operator(self):
		with self.assertRaises(TypeMismatch):
			_run("[ f ] x 0 i")

class ControlTests(unittest.TestCase):

	def test_count(self):
		self.assertEqual(["3"], _texts(_run("0 3 [ 1 + ] c")))
		self.assertEqual(["2"], _texts(_run("0 2.9 [ 1 + ] c")))

	def test_count_non_positive(self):
		for count in ("0", "-2", "abc"):
			with self.subTest(count):
				self.assertEqual(["0"], _texts(_run("0 %s [ 1 + ] c" % count)))

	def test_count_with_a_constant(self):
		with self.assertRaises(TypeMismatch):
			_run("2 5 c")
		self.assertEqual([], _texts(_run("0 5 c")))

	def test_conditional_on_constants(self):
		self.assertEqual(["1"], _texts(_run("[ 1 ] [ 2 ] 1 ?")))
		self.assertEqual(["2"], _texts(_run("[ 1 ] [ 2 ] 0 ?")))

	def test_conditional_on_a_predicate(self):
		self.assertEqual(["1"], _texts(_run("[ 1 ] [ 2 ] [ 3 4 - ] ?")))
		self.assertEqual(["2"], _texts(_run("[ 1 ] [ 2 ] [ 4 4 - ] ?")))

	def test_conditional_on_a_named_flag(self):
		self.assertEqual(["2"], _texts(_run("0 flag : [ 1 ] [ 2 ] flag ?")))

	def test_condition_must_be_constant(self):
		with self.assertRaises(TypeMismatch):
			_run("[ 1 ] [ 2 ] [ [ ] ] ?")

	def test_branch_must_be_invokable(self):
		with self.assertRaises(TypeMismatch):
			_run("1 [ 2 ] 1 ?")

class CursorTests(unittest.TestCase):

	def test_starts_in_the_middle(self):
		m = _machine(200, 100)
		self.assertEqual((100, 50), m.cursor.position())
		self.assertEqual(0, m.cursor.heading)
		self.assertFalse(m.cursor.down)

	def test_rotation(self):
		self.assertAlmostEqual(math.pi / 2, _run("90 r").cursor.heading)
		self.assertAlmostEqual(math.pi / 2, _run("450 r").cursor.heading)
		self.assertAlmostEqual(-math.pi / 2, _run("90 l").cursor.heading)
		self.assertAlmostEqual(0, _run("90 r 90 l").cursor.heading)

	def test_absolute_angle(self):
		self.assertEqual(1, _run("90 r 1 a").cursor.heading)

	def test_pen_up_leaves_no_mark(self):
		m = _run("10 f")
		self.assertEqual((60, 50), m.cursor.position())
		self.assertEqual([], m.surface.calls)

	def test_pen_down_draws_one_segment(self):
		m = _run("d 10 f")
		self.assertEqual([
			("begin_path", ()),
			("move_to", (50, 50)),
			("line_to", (60, 50)),
			("stroke", ()),
		], m.surface.calls)

	def test_back(self):
		m = _run("d 90 r 10 b")
		x, y = m.cursor.position()
		self.assertAlmostEqual(50, x)
		self.assertAlmostEqual(40, y)
		self.assertEqual(["begin_path", "move_to", "line_to", "stroke"], m.surface.names())

	def test_pen_up_again(self):
		self.assertEqual([], _run("d u 10 f").surface.calls)

class ExecuteTests(unittest.TestCase):

	def test_marks_the_end(self):
		surface = RecordingSurface()
		position = execute("d 10 f", surface, 100, 100)
		self.assertEqual((60, 50), position)
		self.assertEqual(["begin_path", "move_to", "line_to", "stroke", "begin_path", "arc", "fill"], surface.names())
		self.assertEqual(("arc", (60, 50, 3, 0, 2 * math.pi)), surface.calls[5])

	def test_underflow_draws_nothing(self):
		surface = RecordingSurface()
		with self.assertRaises(StackUnderflow):
			execute("+", surface, 100, 100)
		self.assertEqual([], surface.calls)

	def test_failure_keeps_partial_drawing(self):
		surface = RecordingSurface()
		with self.assertRaises(StackUnderflow) as cm:
			execute("d 10 f +", surface, 100, 100)
		self.assertEqual(["begin_path", "move_to", "line_to", "stroke"], surface.names())
		self.assertEqual(C("+"), cm.exception.trail[-1])

	def test_trail_leads_to_the_crash(self):
		with self.assertRaises(StackUnderflow) as cm:
			execute("1 2 [ 3 + + + ] !", RecordingSurface(), 100, 100)
		trail = cm.exception.trail
		self.assertEqual(C("!"), trail[0])
		self.assertIsInstance(trail[1], syntax.Block)
		self.assertEqual(C("+"), trail[-1])

	def test_each_run_starts_fresh(self):
		execute("7 n :", RecordingSurface(), 100, 100)
		x, y = execute("n f", RecordingSurface(), 100, 100)
		self.assertTrue(math.isnan(x))

	def test_tracer_sees_each_step(self):
		seen = []
		execute("1 [ 2 ] x +", RecordingSurface(), 100, 100, tracer=lambda v, m: seen.append(str(v)))
		self.assertEqual(["1", "[ 2 ]", "x", "+"], seen)

	def test_recursion_a_few_hundred_deep(self):
		surface = RecordingSurface()
		x, y = execute("d [ k : 1 f [ k 1 - down ! ] [ ] k ? ] down : 300 down !", surface, 100, 100)
		self.assertEqual(301, surface.names().count("stroke"))
		self.assertEqual((351, 50), (x, y))

	def test_endless_recursion_is_too_deep(self):
		with self.assertRaises(TooDeep) as cm:
			execute("[ again ! ] again : again !", RecordingSurface(), 100, 100)
		self.assertGreater(len(cm.exception.trail), 100)
		self.assertEqual(C("!"), cm.exception.trail[0])

	def test_recursion_limit_is_restored(self):
		limit = sys.getrecursionlimit()
		execute("1 2 +", RecordingSurface(), 100, 100)
		with self.assertRaises(TooDeep):
			execute("[ again ! ] again : again !", RecordingSurface(), 100, 100)
		self.assertEqual(limit, sys.getrecursionlimit())

	def test_locations_do_not_pile_up(self):
		execute("d 4 [ 100 f 90 r ] c", RecordingSurface(), 100, 100)
		size = len(location._slices)
		execute("d 4 [ 100 f 90 r ] c", RecordingSurface(), 100, 100)
		self.assertEqual(size, len(location._slices))

	def test_surfaces_may_ignore_the_finish(self):
		self.assertIsNone(NullSurface().finish())

class LibraryTests(unittest.TestCase):

	def test_table_is_frozen(self):
		with self.assertRaises(TypeError):
			BUILTINS["q"] = BUILTINS["f"]

	def test_catalog(self):
		lines = catalog()
		self.assertEqual(len(BUILTINS), len(lines))
		self.assertIn("f = forward <x>", lines)
		self.assertEqual(sorted(lines), lines)

	def test_every_symbol(self):
		self.assertEqual(set("*+-afbdurlcezx.!i?:"), set(BUILTINS))

class SharingTests(unittest.TestCase):

	def test_round_trip(self):
		text = "d\n4 [ 100 f 90 r ] c"
		link = sharing.share_link(text, "https://example.com/scrawl/?theme=dark")
		self.assertIn("theme=dark", link)
		self.assertEqual(text, sharing.program_from_link(link))

	def test_replaces_old_program(self):
		link = sharing.share_link("1", sharing.share_link("2", "http://x/"))
		self.assertEqual("1", sharing.program_from_link(link))

	def test_no_program(self):
		self.assertIsNone(sharing.program_from_link("http://x/?other=1"))
		self.assertIsNone(sharing.program_from_link("http://x/?prgm=%21%21"))

if __name__ == '__main__':
	unittest.main()
