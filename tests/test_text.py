from mediashare.utils.text import format_description


def test_empty_input():
    assert format_description(None) == ""
    assert format_description("") == ""
    assert format_description("   \n  ") == ""


def test_bullets_are_normalised():
    text = "Intro line\n- first\n●second\n>>  third\n◆ fourth"
    assert format_description(text) == "Intro line\n• first\n• second\n• third\n• fourth"


def test_plain_lines_untouched():
    text = "  indented text  \nA - dash inside"
    assert format_description(text) == text


def test_lone_bullet_collapses():
    assert format_description("•") == "•"


def test_video_entry_description_is_formatted():
    from mediashare.models.video import VideoEntry

    entry = VideoEntry(url="https://youtu.be/abc", description="Tracks\n- one\n● two")
    assert entry.description == "Tracks\n• one\n• two"
    assert VideoEntry(url="https://youtu.be/abc").description is None
