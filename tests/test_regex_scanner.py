import io

import pytest

from ajutils.regex_scanner import RegexScanner

INPUT = """The quick
brown fox
jumped over
the lazy
dog!

alpha: 42
bravo 007 delta
charlie
bravo 7 delta
echo
"""


def test_fail_to_compile():
    scanner = RegexScanner()
    with pytest.raises(ValueError, match="fail"):
        scanner.add("fail", "a(b")


def test_scanner():
    scanner = RegexScanner()
    scanner.add("one", "\\bquick\\b")
    scanner.add("two", "fox$")

    jumped = {}

    def on_jumped(key, line, line_number, matches):
        jumped["line"] = line
        jumped["number"] = line_number

    scanner.add("three", "^jumped\\b", on_jumped)

    four_matches = []

    def on_four(key, line, line_number, matches):
        four_matches.append(list(matches))

    scanner.add("four", "ox|ov", on_four)
    scanner.add("five", "(?i)DOG")
    scanner.add("no-match", "zebra")
    scanner.add("capture", "bravo\\s+(\\d+)\\s+delta")

    result = scanner.process(io.StringIO(INPUT))

    assert len(result) == 6
    assert jumped == {"line": "jumped over", "number": 2}
    assert four_matches == [["ox"], ["ov"]]
    assert result["five"] == ["dog"]
    assert "no-match" not in result
    assert result["capture"] == ["bravo 7 delta", "7"]


def test_write_to_out():
    text = "The quick brown\n\tfox jumped"
    scanner = RegexScanner()
    scanner.add("one", "\\bquick\\b")

    out = io.StringIO()
    scanner.set_out(out)
    result = scanner.process(io.StringIO(text))

    assert out.getvalue() == text + "\n"
    assert result == {"one": ["quick"]}


def test_callback_error_stops_processing():
    seen = []

    def on_line(key, line, line_number, matches):
        seen.append(line_number)
        if line_number == 1:
            raise RuntimeError("stop")

    scanner = RegexScanner()
    scanner.add("any", ".", on_line)
    with pytest.raises(RuntimeError, match="stop"):
        scanner.process(io.StringIO("a\nb\nc\n"))
    assert seen == [0, 1]


def test_unmatched_group_is_empty_string():
    scanner = RegexScanner()
    scanner.add("opt", "(a)(x)?")
    assert scanner.process(io.StringIO("abc\n")) == {"opt": ["a", "a", ""]}


def test_carriage_return_is_stripped():
    lines = []
    scanner = RegexScanner()
    scanner.add("all", "^.*$", lambda key, line, number, matches: lines.append(line))
    scanner.process(io.StringIO("one\r\ntwo\r\n"))
    assert lines == ["one", "two"]


def test_too_long_line_raises():
    scanner = RegexScanner()
    scanner.add("x", "x")
    with pytest.raises(ValueError, match="token too long"):
        scanner.process(io.StringIO("a" * (64 * 1024) + "\n"))