import unittest
from itertools import zip_longest

from polychain.chains import Chain
from polychain.errors import InputError
from polychain.parse import tokenize, parse_term, parse_polynomial
from polychain.terms import Term

def assert_token_stream_matches(s, *types):
    for tok, t in zip_longest(tokenize(s), types):
        assert tok is not None and tok.type == t, "{!r}: expected {}, got {}".format(s, t, tok)

class TokenizerTests(unittest.TestCase):

    def test_numbers(self):
        assert_token_stream_matches("0", "NUM")
        assert_token_stream_matches("1.5", "NUM")
        assert_token_stream_matches("2.", "NUM")
        assert_token_stream_matches("2e3", "NUM")

    def test_marker_is_not_part_of_number(self):
        assert_token_stream_matches("2x", "NUM", "VAR")
        assert_token_stream_matches("0x1A", "NUM", "VAR", "NUM", "ILLEGAL")

    def test_term(self):
        assert_token_stream_matches(" - 7x^3 ", "SIGN", "NUM", "VAR", "CARET", "NUM")

    def test_illegal(self):
        assert_token_stream_matches("2xy", "NUM", "VAR", "ILLEGAL")
        assert_token_stream_matches(".5", "ILLEGAL", "NUM")

    def test_each_illegal_character_is_one_token(self):
        toks = list(tokenize("x%$ 2"))
        self.assertEqual([t.type for t in toks], ["VAR", "ILLEGAL", "ILLEGAL", "NUM"])
        self.assertEqual([t.value for t in toks[1:3]], ["%", "$"])
        self.assertEqual(toks[3].lexpos, 4)

    def test_start_offset(self):
        toks = list(tokenize("x + 3", start=2))
        self.assertEqual([t.type for t in toks], ["SIGN", "NUM"])
        self.assertEqual(toks[0].lexpos, 2)

class TermParserTests(unittest.TestCase):

    def test_legal_terms(self):
        cases = [
            ("2",        Term(2.0, 0)),
            ("-2",       Term(-2.0, 0)),
            (" - 2 ",    Term(-2.0, 0)),
            ("+2",       Term(2.0, 0)),
            (" + 2 ",    Term(2.0, 0)),
            ("2x",       Term(2.0, 1)),
            ("-2x",      Term(-2.0, 1)),
            (" - 2x ",   Term(-2.0, 1)),
            (" + 2x ",   Term(2.0, 1)),
            ("2x^2",     Term(2.0, 2)),
            (" - 2x^2 ", Term(-2.0, 2)),
            ("+2x^2",    Term(2.0, 2)),
            ("x^2",      Term(1.0, 2)),
            ("-x^2",     Term(-1.0, 2)),
            (" + x^2 ",  Term(1.0, 2)),
            ("x",        Term(1.0, 1)),
            (" - x ",    Term(-1.0, 1)),
            ("+x",       Term(1.0, 1)),
            ("1.5x^12",  Term(1.5, 12)),
            ("2e3",      Term(2000.0, 0)),
        ]
        for text, expected in cases:
            term, end = parse_term(text)
            self.assertEqual(term, expected, text)

    def test_cursor_after_term(self):
        self.assertEqual(parse_term("  - 2x^3 + 1"), (Term(-2.0, 3), 8))
        self.assertEqual(parse_term("x"), (Term(1.0, 1), 1))
        self.assertEqual(parse_term("2x - 6x", 3), (Term(-6.0, 1), 7))

    def test_space_ends_coefficient(self):
        self.assertEqual(parse_term("2 x"), (Term(2.0, 0), 1))

    def test_exponent_integer_prefix(self):
        self.assertEqual(parse_term("x^2.5"), (Term(1.0, 2), 3))
        with self.assertRaises(InputError):
            parse_term("x^2.5", 3)

    def test_malformed_term(self):
        with self.assertRaises(InputError) as cm:
            parse_term("2xy")
        self.assertEqual(cm.exception.position, 0)

    def test_malformed_term_keeps_cursor(self):
        with self.assertRaises(InputError) as cm:
            parse_term("x + 3y", 2)
        self.assertEqual(cm.exception.position, 2)
        self.assertEqual(cm.exception.text, "x + 3y")

    def test_rejected_terms(self):
        for text in ["", " ", "+", "-", ".5", "x^", "x^-2", "x^ 2", "^2", "2+3", "2^3", "y", "1e999", "2ex", "xx", "x^99999999999999999999", "x^100001"]:
            with self.assertRaises(InputError, msg=repr(text)):
                parse_term(text)

class PolynomialParserTests(unittest.TestCase):

    def test_exponent_out_of_range(self):
        with self.assertRaises(InputError) as cm:
            parse_polynomial("1 + x^99999999999999999999")
        self.assertEqual(cm.exception.position, 2)
        self.assertEqual(parse_polynomial("x^100000").degree, 100000)

    def test_parse(self):
        p = parse_polynomial("7x^3 + x^2 -9x + 30")
        self.assertEqual(p, Chain((Term(30.0, 0), Term(-9.0, 1), Term(1.0, 2), Term(7.0, 3))))
        self.assertEqual(p.degree, 3)
        self.assertEqual(p(3), 201.0)

    def test_duplicate_degrees_are_reduced(self):
        self.assertEqual(parse_polynomial("2x - 6x"), Chain((Term(-4.0, 1),)))
        self.assertEqual(parse_polynomial("x^2 + 1 + x^2"), Chain((Term(1.0, 0), Term(2.0, 2))))

    def test_zero_polynomial(self):
        self.assertIsNone(parse_polynomial("0x^12"))
        self.assertIsNone(parse_polynomial("2x - 2x"))
        self.assertIsNone(parse_polynomial(""))
        self.assertIsNone(parse_polynomial("0.00001"))

    def test_null_terms_are_dropped(self):
        p = parse_polynomial("+2x - 11 + 0x^12")
        self.assertEqual(p, Chain((Term(-11.0, 0), Term(2.0, 1))))
        self.assertEqual(p.degree, 1)

    def test_sample_polynomials(self):
        self.assertEqual(
            parse_polynomial("2 + 5x - 7x^2"),
            Chain((Term(2.0, 0), Term(5.0, 1), Term(-7.0, 2))))
        self.assertEqual(
            parse_polynomial(" - 6 - 6x - 6x^2 - 6x^3 - 6x^4 "),
            Chain(Term(-6.0, i) for i in range(5)))
        self.assertEqual(
            parse_polynomial(" + 1 + 1x + x^4 "),
            Chain((Term(1.0, 0), Term(1.0, 1), Term(1.0, 4))))
        self.assertEqual(parse_polynomial("-15x^3"), Chain((Term(-15.0, 3),)))

    def test_result_is_normalized(self):
        p = parse_polynomial("3 + x^5 - 3 + 2x^5 + x")
        assert p.is_normalized()
        self.assertEqual(p, Chain((Term(1.0, 1), Term(3.0, 5))))

    def test_trailing_newline(self):
        self.assertEqual(parse_polynomial("x\n"), Chain((Term(1.0, 1),)))

    def test_malformed_term_fails_whole_line(self):
        with self.assertRaises(InputError) as cm:
            parse_polynomial("2 + 3xy")
        self.assertEqual(cm.exception.position, 2)
        with self.assertRaises(InputError):
            parse_polynomial("x^2 + 2xy + 1")
