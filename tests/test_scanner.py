import pytest

from parsek.scan import Scanner, SimpleScanner


def test_match_advances_a_new_scanner():
    s = SimpleScanner("abc")
    tok, news = s.match(r"ab")
    assert tok == b"ab"
    assert news.cursor() == 2
    assert s.cursor() == 0


def test_failed_match_returns_receiver():
    s = SimpleScanner("abc")
    tok, news = s.match(r"x")
    assert tok is None
    assert news is s


def test_caret_anchors_at_cursor():
    s = SimpleScanner("xab", cursor=1)
    tok, news = s.match(r"^ab")
    assert tok == b"ab"
    assert news.at_end()


def test_match_does_not_search_ahead():
    tok, _ = SimpleScanner("xab").match(r"ab")
    assert tok is None


def test_empty_match_is_success_without_advance():
    s = SimpleScanner("abc")
    tok, news = s.match(r"z*")
    assert tok == b""
    assert news.cursor() == 0


def test_skip_whitespace():
    s = SimpleScanner("  \n\t x")
    ws, news = s.skip_whitespace()
    assert ws == b"  \n\t "
    assert news.cursor() == 5
    assert s.cursor() == 0


def test_skip_whitespace_with_nothing_to_skip():
    s = SimpleScanner("x")
    ws, news = s.skip_whitespace()
    assert ws == b""
    assert news.cursor() == 0
    assert news is not s


def test_clone_is_independent_snapshot():
    s = SimpleScanner("hello", cursor=2)
    c = s.clone()
    assert c is not s
    assert c.cursor() == 2
    _, advanced = c.match(r"l+")
    assert advanced.cursor() == 4
    assert c.cursor() == 2 and s.cursor() == 2
    assert advanced.text is s.text


def test_at_end():
    assert SimpleScanner("").at_end()
    s = SimpleScanner("a")
    assert not s.at_end()
    _, s = s.match(r"a")
    assert s.at_end()


def test_str_input_uses_utf8_byte_offsets():
    s = SimpleScanner("éa")
    assert s.text == "éa".encode("utf-8")
    tok, news = s.match("é")
    assert tok == "é".encode("utf-8")
    assert news.cursor() == 2


def test_bytes_pattern():
    tok, _ = SimpleScanner(b"123").match(rb"[0-9]+")
    assert tok == b"123"


def test_cursor_out_of_range():
    with pytest.raises(ValueError):
        SimpleScanner("ab", cursor=3)


def test_abstract_scanner():
    s = Scanner()
    for call in (s.clone, s.cursor, s.skip_whitespace, s.at_end, lambda: s.match("x")):
        with pytest.raises(NotImplementedError):
            call()


def test_str_pattern_quantifies_characters():
    tok, news = SimpleScanner("ééx").match(r"é+")
    assert tok == "éé".encode("utf-8")
    assert news.cursor() == 4


def test_str_pattern_class_never_splits_a_character():
    s = SimpleScanner("è")
    tok, news = s.match(r"[éb]")
    assert tok is None
    assert news is s
    tok, news = s.match(r".")
    assert tok == "è".encode("utf-8")
    assert news.at_end()


def test_bytes_match_ending_inside_a_character_is_a_miss():
    s = SimpleScanner("é")
    tok, news = s.match(rb"\xc3")
    assert tok is None
    assert news is s


def test_bytes_and_str_patterns_share_position():
    s = SimpleScanner("aéb")
    _, s = s.match(rb"a\xc3\xa9")
    assert s.cursor() == 3
    tok, s = s.match(r"b")
    assert tok == b"b"
    assert s.at_end()


def test_invalid_utf8_is_rejected_up_front():
    with pytest.raises(ValueError):
        SimpleScanner(b"[\xe9]")


def test_cursor_inside_a_character():
    with pytest.raises(ValueError):
        SimpleScanner("é", cursor=1)


class _RecordingPattern:
    def __init__(self, rgx):
        self.rgx = rgx
        self.calls = []

    def match(self, subject, pos):
        self.calls.append((subject, pos))
        return self.rgx.match(subject, pos)


def test_match_runs_in_place_without_copying(monkeypatch):
    import parsek.scan as scan
    compile_ = scan._compile
    recorded = []

    def recording_compile(pattern):
        rec = _RecordingPattern(compile_(pattern))
        recorded.append(rec)
        return rec

    monkeypatch.setattr(scan, "_compile", recording_compile)
    s = SimpleScanner("ab cd", cursor=3)
    tok, _ = s.match(r"^cd")
    assert tok == b"cd"
    subject, pos = recorded[-1].calls[-1]
    assert len(subject) == 5 and pos == 3

    tok, _ = s.match(rb"cd")
    assert tok == b"cd"
    subject, pos = recorded[-1].calls[-1]
    assert subject is s.text and pos == 3
