import dataclasses
import json
import os
import tempfile
import unittest

from RegexAST import *
from RegexParser import parse
from ASTGraph import ASTGraph, regex_to_graph


class TestNodes(unittest.TestCase):
    def test_repr(self):
        et = Seq([Or(Seq([Char('a')]), Seq([Char('b')])), Star(Char('c'))])
        self.assertEqual(repr(et), "Seq([Or(Seq([Char('a')]), Seq([Char('b')])), Star(Char('c'))])")

    def test_immutable(self):
        et = Char('a')
        with self.assertRaises(dataclasses.FrozenInstanceError):
            et.value = 'b'
        self.assertIsInstance(Seq([et]).children, tuple)

    def test_chars(self):
        et = Seq([Plus(Char('x')), Or(Seq([Char('y')]), Seq([Char('z')]))])
        self.assertEqual(list(et.chars()), ['x', 'y', 'z'])


class TestToPattern(unittest.TestCase):
    patterns = [
        'a', 'abc', 'a|b|c', '(a|b)c', 'a**', '(ab)+', '(a)', '((a))b',
        '\\(\\)\\|\\+\\*\\?\\\\', '((a|b)|c)', '(a|(b|c))d', '(a|b)*x?',
        'hello world|foo(bar|baz)+', '(((x)*)?)+',
    ]

    def test_canonical(self):
        self.assertEqual(parse('a|b|c').to_pattern(), 'a|b|c')
        self.assertEqual(parse('\\+a').to_pattern(), '\\+a')
        self.assertEqual(Star(Seq([Char('a'), Char('b')])).to_pattern(), '(ab)*')

    def test_reparse(self):
        for regstr in self.patterns:
            et = parse(regstr)
            self.assertEqual(parse(et.to_pattern()), et, regstr)

    def test_dropped_pieces_are_not_rendered(self):
        self.assertEqual(parse('a()|').to_pattern(), 'a')


class TestGraph(unittest.TestCase):
    def test_to_json(self):
        graph = regex_to_graph('a|b*')
        self.assertEqual(graph.to_json(), {
            "type": "Or",
            "children": [
                {"type": "Seq", "children": [{"type": "Char", "value": "a"}]},
                {"type": "Seq", "children": [
                    {"type": "Star", "children": [{"type": "Char", "value": "b"}]},
                ]},
            ],
        })

    def test_save_json(self):
        graph = ASTGraph(parse('(ä)+'))
        with tempfile.TemporaryDirectory() as tmp:
            filename = graph.save_json(os.path.join(tmp, 'ast.json'))
            with open(filename, encoding='utf-8') as f:
                self.assertEqual(json.load(f), graph.to_json())

    def test_to_dot(self):
        dot = regex_to_graph('ab|\\\\').to_dot('ab|\\\\')
        source = dot.source
        self.assertIn('Or', source)
        self.assertIn("Char 'a'", source)
        self.assertIn('Regular Expression: ab|\\\\\\\\', source)
        # one edge per child: Or->2 Seq, Seq->a, Seq->b, Seq->'\'
        self.assertEqual(source.count('->'), 5)
        # Seq and Or children are numbered in order
        edges = [line for line in source.splitlines() if '->' in line]
        self.assertEqual(sum('label=0' in line for line in edges), 3)
        self.assertEqual(sum('label=1' in line for line in edges), 2)

    def test_quantifier_edges_are_unlabelled(self):
        source = regex_to_graph('a*').to_dot().source
        edges = [line for line in source.splitlines() if '->' in line]
        # only the Seq->Star edge is numbered, Star->a carries no label
        self.assertEqual(len(edges), 2)
        self.assertEqual(['label=0' in line for line in edges], [True, False])
        self.assertEqual(sum('label=' in line for line in edges), 1)

    def test_nesting_limit_passed_through(self):
        from RegexParser import NestingTooDeep
        with self.assertRaises(NestingTooDeep):
            regex_to_graph('((a))', max_depth=1)


def main():
    unittest.main(__name__)
