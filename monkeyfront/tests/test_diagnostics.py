import io
import unittest

from monkeyfront.diagnostics import DiagnosticSink, ParseError, write_lines
from monkeyfront.frontend import ParseResult


class DiagnosticSinkTests(unittest.TestCase):
    def setUp(self):
        self.sink = DiagnosticSink()

    def test_keeps_arrival_order_without_dedup(self):
        self.sink.append("first")
        self.sink.append("second")
        self.sink.append("first")
        self.assertEqual(self.sink.messages, ("first", "second", "first"))
        self.assertEqual(len(self.sink), 3)
        self.assertEqual(list(self.sink), ["first", "second", "first"])

    def test_report_formats_message(self):
        self.sink.report("expected {} but got {} at {}:{}", "';'", "end of input", 1, 11)
        self.assertEqual(self.sink.messages, ("expected ';' but got end of input at 1:11",))

    def test_drain_writes_one_line_per_message_and_keeps_them(self):
        self.sink.append("a")
        self.sink.append("b")
        out = io.StringIO()
        self.sink.drain_into(out)
        self.sink.drain_into(out)
        self.assertEqual(out.getvalue(), "a\nb\na\nb\n")
        self.assertEqual(len(self.sink), 2)

    def test_drain_of_empty_sink_writes_nothing(self):
        out = io.StringIO()
        self.sink.drain_into(out)
        self.assertEqual(out.getvalue(), "")

    def test_release(self):
        self.sink.append("a")
        self.sink.release()
        self.assertTrue(self.sink.released)
        self.assertEqual(len(self.sink), 0)
        self.sink.release()
        with self.assertRaises(RuntimeError):
            self.sink.append("b")


class WriteLinesTests(unittest.TestCase):
    def test_sink_and_result_write_the_same_lines(self):
        sink = DiagnosticSink()
        sink.append("one")
        sink.append("two")
        from_sink, from_result, direct = io.StringIO(), io.StringIO(), io.StringIO()
        sink.drain_into(from_sink)
        ParseResult(diagnostics=["one", "two"]).write_errors(from_result)
        write_lines(direct, ["one", "two"])
        self.assertEqual(from_sink.getvalue(), "one\ntwo\n")
        self.assertEqual(from_result.getvalue(), from_sink.getvalue())
        self.assertEqual(direct.getvalue(), from_sink.getvalue())


class ParseErrorTests(unittest.TestCase):
    def test_single_message(self):
        err = ParseError(["expected ';' but got end of input at 1:11"])
        self.assertEqual(str(err), "expected ';' but got end of input at 1:11")

    def test_counts_further_messages(self):
        err = ParseError(["one", "two", "three"])
        self.assertEqual(str(err), "one (and 2 more)")
        self.assertEqual(err.messages, ["one", "two", "three"])


if __name__ == "__main__":
    unittest.main()
