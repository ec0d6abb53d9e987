import logging

import pytest

from speech_pipeline.text_loader import FileReadError, escape_xml, load_input_text, read_text_file


def test_escape_xml_replaces_all_metacharacters():
    escaped = escape_xml("O'Brien & \"Co\" <ok>")

    assert escaped == "O&apos;Brien &amp; &quot;Co&quot; &lt;ok&gt;"


def test_escape_xml_leaves_no_raw_metacharacters():
    samples = ["", "plain text.", "<<>>&&''\"\"", "a&amp;b", "tag <b attr='1'>x</b> & more"]

    for sample in samples:
        escaped = escape_xml(sample)
        assert "<" not in escaped
        assert ">" not in escaped
        assert "'" not in escaped
        assert '"' not in escaped
        # Every ampersand left must start one of the emitted entities.
        stripped = escaped
        for entity in ("&lt;", "&gt;", "&amp;", "&apos;", "&quot;"):
            stripped = stripped.replace(entity, "")
        assert "&" not in stripped


def test_escape_xml_does_not_double_escape():
    assert escape_xml("&<") == "&amp;&lt;"


def test_read_text_file_trims_and_escapes(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text("\n  Fish & chips. <Done>  \n", encoding="utf-8")

    assert read_text_file(path) == "Fish &amp; chips. &lt;Done&gt;"


def test_read_text_file_missing_returns_empty(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        text = read_text_file(tmp_path / "missing.txt")

    assert text == ""
    assert "Error reading file" in caplog.text


def test_load_input_text_raises_for_bad_encoding(tmp_path):
    path = tmp_path / "latin.txt"
    path.write_bytes(b"caf\xe9")

    with pytest.raises(FileReadError):
        load_input_text(path)


def test_read_text_file_bad_encoding_returns_empty(tmp_path):
    path = tmp_path / "latin.txt"
    path.write_bytes(b"caf\xe9")

    assert read_text_file(path) == ""
