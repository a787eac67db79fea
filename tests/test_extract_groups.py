"""
Group (inline) extraction tests

Tests marker detection, template classification, the replay of templates
against marker pairs and the consumption order of repeated groups.
"""

from codeimport.lib.extract import (
    content_extract,
    elements_extract,
    group_find,
    groups_replay,
    lines_split,
    markers_index,
)
from codeimport.models.directive import (
    Directive,
    GroupElement,
    ImportMode,
    MarkerCursor,
    MarkerIndex,
    TextElement,
)


class TestGroupFind:
    """Test marker recognition on single lines"""

    def test_html_comment(self):
        assert group_find("<!-- group setup -->") == "setup"

    def test_line_comment(self):
        assert group_find("    # group main-loop") == "main-loop"

    def test_underscore_and_digits(self):
        assert group_find("// group step_2") == "step_2"

    def test_several_spaces(self):
        assert group_find("//  group   x") == "x"

    def test_no_space_is_not_a_marker(self):
        assert group_find("# groups") is None

    def test_missing_name(self):
        assert group_find("# group") is None

    def test_later_occurrence_used(self):
        assert group_find("grouping // group tail") == "tail"

    def test_custom_token(self):
        assert group_find("# region intro", token="region") == "intro"


class TestMarkerIndex:
    """Test the build phase"""

    def test_positions_in_file_order(self):
        lines = ["# group a", "x", "# group b", "# group a", "# group b"]
        index = markers_index(lines)
        assert index.positions_get("a") == (0, 3)
        assert index.positions_get("b") == (2, 4)

    def test_unknown_group(self):
        assert markers_index(["plain"]).positions_get("a") == ()


class TestMarkerCursor:
    """Test functional consumption of marker pairs"""

    def test_take_does_not_mutate(self):
        cursor = MarkerCursor(index=MarkerIndex(positions={"a": (1, 3, 5, 8)}))
        pair, advanced = cursor.pair_take("a")
        assert pair == (1, 3)
        assert cursor.consumed == {}
        second, _ = advanced.pair_take("a")
        assert second == (5, 8)

    def test_pairs_never_reused(self):
        cursor = MarkerCursor(index=MarkerIndex(positions={"a": (1, 3)}))
        _, cursor = cursor.pair_take("a")
        pair, same = cursor.pair_take("a")
        assert pair is None
        assert same is cursor

    def test_single_position_is_not_a_pair(self):
        cursor = MarkerCursor(index=MarkerIndex(positions={"a": (4,)}))
        assert cursor.pair_take("a")[0] is None


class TestElements:
    """Test the template phase"""

    def test_classification(self):
        elements = elements_extract("a\n<!-- group x -->\n# groups\nb")
        assert elements == [
            TextElement(text="a"),
            GroupElement(group="x"),
            TextElement(text="# groups"),
            TextElement(text="b"),
        ]


class TestReplay:
    """Test assembling output from template and markers"""

    def test_round_trip(self):
        """A single reference yields exactly the lines between its markers"""
        lines = lines_split("# group a\nx = 1\ny = 2\n# group a")
        result = groups_replay(lines, [GroupElement(group="a")])
        assert result.text == "x = 1\ny = 2"
        assert result.missing == []

    def test_repeated_group_consumes_pairs_in_order(self):
        lines = lines_split("# group a\nfirst\n# group a\nbetween\n# group a\nsecond\n# group a")
        result = groups_replay(lines, [GroupElement(group="a"), TextElement(text="--"), GroupElement(group="a")])
        assert result.text == "first\n--\nsecond"

    def test_interleaved_groups(self):
        lines = lines_split("# group a\nA\n# group a\n# group b\nB\n# group b")
        elements = elements_extract("# group b\nmid\n# group a")
        assert groups_replay(lines, elements).text == "B\nmid\nA"

    def test_missing_pair_is_reported(self):
        """Template and file both mention x twice: the second reference has no pair"""
        template = "a\n<!-- group x -->\n<!-- group x -->\nb"
        content = "1\n<!-- group x -->\n2\n<!-- group x -->\n3"
        result = groups_replay(lines_split(content), elements_extract(template))
        assert result.text == "a\n2\nb"
        assert result.missing == ["x"]

    def test_unknown_group(self):
        result = groups_replay(["plain"], [TextElement(text="t"), GroupElement(group="nope")])
        assert result.text == "t"
        assert result.missing == ["nope"]

    def test_adjacent_markers_give_empty_section(self):
        result = groups_replay(["# group a", "# group a"], [GroupElement(group="a")])
        assert result.text == ""
        assert result.missing == []

    def test_marker_lines_excluded(self):
        lines = ["keep out", "// group a", "in", "// group a", "keep out"]
        assert "group" not in groups_replay(lines, [GroupElement(group="a")]).text


class TestContentExtract:
    """Test dispatch on the directive mode"""

    def test_group_mode_uses_template(self):
        directive = Directive(path="a.py", mode=ImportMode.GROUP)
        result = content_extract(directive, "# group a\nbody\n# group a\n", "# group a")
        assert result.text == "body"

    def test_classic_mode_ignores_template(self):
        directive = Directive(path="a.py", from_line=2, has_dash=False)
        result = content_extract(directive, "x\ny\nz", "# group a")
        assert result.text == "y"
        assert result.missing == []
