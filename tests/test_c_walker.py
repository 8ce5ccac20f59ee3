import os
import tempfile
import textwrap
import unittest

import loop_model as lm
from c_parser import ParseCError, parse_c_file
from c_walker import walk_ast
from loop_shape_rule import LoopShapeRule
from rule_engine import RuleEngine


def classify_c(code, filename="fixture.c"):
    with tempfile.TemporaryDirectory() as td:
        src = os.path.join(td, filename)
        with open(src, "w", encoding="utf-8") as f:
            f.write(textwrap.dedent(code))

        translation_unit = parse_c_file(src)
        nodes = []
        walk_ast(translation_unit.cursor, nodes, target_file=os.path.realpath(src))
        return [r["classification"] for r in RuleEngine([LoopShapeRule()]).run(nodes)]


class CLoopShapeTest(unittest.TestCase):
    def test_declared_counting_loop(self):
        results = classify_c(
            """
            void f(void) {
                for (int i = 0; i < 10; i++) {
                }
            }
            """
        )
        self.assertEqual(results, [lm.CountingLoop(lm.ZERO, lm.LITERAL, lm.ONE)])

    def test_assigned_counting_loop_with_compound_stride(self):
        results = classify_c(
            """
            void f(int n, int m) {
                int i;
                for (i = n; i <= m; i += 2) {
                }
            }
            """
        )
        self.assertEqual(results, [lm.CountingLoop(lm.NON_LITERAL, lm.NON_LITERAL, lm.LITERAL)])

    def test_prefix_decrement(self):
        results = classify_c(
            """
            void f(int bound) {
                for (int i = 5; i < bound; --i) {
                }
            }
            """
        )
        self.assertEqual(results, [lm.CountingLoop(lm.LITERAL, lm.NON_LITERAL, lm.LITERAL)])

    def test_bare_and_cond_only(self):
        results = classify_c(
            """
            int g(void);

            void f(void) {
                for (;;) {
                    break;
                }
                for (; g();) {
                }
            }
            """
        )
        self.assertEqual(results, [lm.BARE_FOR, lm.COND_ONLY])

    def test_missing_clauses(self):
        results = classify_c(
            """
            void f(void) {
                int i = 0;
                for (; i < 10; i++) {
                }
                for (int j = 0; j < 10;) {
                    j++;
                }
            }
            """
        )
        self.assertEqual(results, [lm.MISSING_INIT, lm.MISSING_POST])

    def test_rejections(self):
        results = classify_c(
            """
            void f(void) {
                for (int i = 10; i > 0; i--) {
                }
                for (int i = 0, j = 0; i < 10; i++) {
                }
                for (int j = 0, i = 0; i < 10; i++) {
                }
                for (int i = 0; i < 10; i = i + 1) {
                }
                for (int i = 0, j = 10; i < j; i++, j--) {
                }
            }
            """
        )
        self.assertEqual(
            results,
            [
                lm.COND_NOT_LESS_THAN,
                lm.INIT_NOT_SIMPLE_ASSIGN,
                lm.INIT_NOT_SIMPLE_ASSIGN,
                lm.POST_ASSIGN_BAD_OPERATOR,
                lm.INIT_NOT_SIMPLE_ASSIGN,
            ],
        )

    def test_post_targets_other_variable(self):
        results = classify_c(
            """
            void f(void) {
                int j = 0;
                for (int i = 0; i < 10; j++) {
                }
            }
            """
        )
        self.assertEqual(results, [lm.INIT_POST_MISMATCH])

    def test_range_for_and_nesting(self):
        results = classify_c(
            """
            void f() {
                int xs[3] = {1, 2, 3};
                for (int x : xs) {
                    for (int i = 0; i < x; i += 1) {
                    }
                }
            }
            """,
            filename="fixture.cpp",
        )
        self.assertEqual(results, [lm.RANGE, lm.CountingLoop(lm.ZERO, lm.NON_LITERAL, lm.ONE)])

    def test_dereferenced_increment_is_not_incdec(self):
        results = classify_c(
            """
            void f(int *p) {
                int i;
                for (i = 0; i < 10; *p++) {
                }
                for (i = 0; i < 10; -i--) {
                }
                for (i = 0; i < 10; i ++) {
                }
            }
            """
        )
        self.assertEqual(
            results,
            [
                lm.POST_NOT_ASSIGN_OR_INC_DEC,
                lm.POST_NOT_ASSIGN_OR_INC_DEC,
                lm.CountingLoop(lm.ZERO, lm.LITERAL, lm.ONE),
            ],
        )

    def test_macro_loop_is_skipped(self):
        results = classify_c(
            """
            #define LOOP(i, n) for (i = 0; i < n; i++)

            void f(int n) {
                int i;
                LOOP(i, n) {
                }
                for (i = 0; i < n; i++) {
                }
            }
            """
        )
        self.assertEqual(results, [lm.CountingLoop(lm.ZERO, lm.NON_LITERAL, lm.ONE)])

    def test_syntax_error_raises(self):
        with self.assertRaises(ParseCError):
            classify_c(
                """
                void f(void) {
                    for (int i = 0; i < ; i++) {
                }
                """
            )


if __name__ == "__main__":
    unittest.main()
