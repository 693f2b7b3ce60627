import io
import unittest
from unittest import mock

from monkeyfront import ParseError, lexer, parse_source


class ParseSourceTests(unittest.TestCase):
    def test_all_statements_recognized(self):
        source = 'let a = "hello world";\nlet b = 2;\n\n'
        result = parse_source(source)
        self.assertTrue(result.ok)
        self.assertEqual([s.ident.text(source) for s in result.statements], ["a", "b"])

    def test_empty_source(self):
        result = parse_source("")
        self.assertTrue(result.ok)
        self.assertEqual(result.statements, [])

    def test_truncated_statement_reports_once(self):
        result = parse_source("let a = 12")
        self.assertEqual(result.statements, [])
        self.assertEqual(result.diagnostics, ["expected ';' but got end of input at 1:11"])

    def test_recovers_at_next_let(self):
        source = ";; let a = 1; x let b = 2;"
        result = parse_source(source)
        self.assertEqual([s.ident.text(source) for s in result.statements], ["a", "b"])
        self.assertEqual(len(result.diagnostics), 3)

    def test_limit_caps_parse_calls(self):
        result = parse_source(";;;;", limit=2)
        self.assertEqual(len(result.diagnostics), 2)

    def test_strict_raises(self):
        with self.assertRaises(ParseError) as ctx:
            parse_source(";;", strict=True)
        self.assertEqual(len(ctx.exception.messages), 2)
        self.assertEqual(str(ctx.exception), "expected 'let' but got ';' at 1:1 (and 1 more)")

    def test_strict_passes_clean_source(self):
        self.assertEqual(len(parse_source("let a = 1;", strict=True).statements), 1)

    def test_write_errors(self):
        out = io.StringIO()
        parse_source(";").write_errors(out)
        self.assertEqual(out.getvalue(), "expected 'let' but got ';' at 1:1\n")

    def test_debug_log_reports_cursor_without_rescanning(self):
        with mock.patch("monkeyfront.lexer.scan_token", wraps=lexer.scan_token) as scan:
            quiet = parse_source("let a = 1;")
        with self.assertLogs("monkeyfront.frontend", level="DEBUG") as logs:
            with mock.patch("monkeyfront.lexer.scan_token", wraps=lexer.scan_token) as scan_debug:
                loud = parse_source("let a = 1;")
        self.assertEqual(quiet, loud)
        self.assertEqual(scan.call_count, scan_debug.call_count)
        self.assertIn("1 parse calls stopped at byte 10", "\n".join(logs.output))

    def test_bytes_source(self):
        result = parse_source(b"let a = 1; let b = 2;")
        self.assertTrue(result.ok)
        self.assertEqual(len(result.statements), 2)

    def test_logs_summary(self):
        with self.assertLogs("monkeyfront.frontend", level="INFO") as logs:
            parse_source("let a = 1; ;")
        self.assertIn("Parsed 1 statements with 1 diagnostics", logs.output[-1])


if __name__ == "__main__":
    unittest.main()
