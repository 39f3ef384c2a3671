"""Tests for merged profile output.

Covers:
- ProfileWriter.generate() wire format
- Empty merge handling
- Round trip through the parser
- Saving to disk
"""

from pathlib import Path

from goverage.profile.merger import merge_profiles
from goverage.profile.parser import parse_profile_text
from goverage.profile.schema import Block, MergedProfile, Mode
from goverage.reporting.profile_writer import ProfileWriter, format_block


class TestGenerate:
    """Tests for rendering merged profiles."""

    def test_wire_format(self, runs) -> None:
        text = ProfileWriter().generate(merge_profiles(runs))

        assert text == (
            "mode: count\n"
            "example.com/m/a.go:3.10,5.2 1 3\n"
            "example.com/m/a.go:7.10,9.2 1 1\n"
            "example.com/m/b.go:3.10,5.2 2 3\n"
            "example.com/m/c.go:1.1,2.2 1 4\n"
        )

    def test_files_sorted(self) -> None:
        merged = MergedProfile(
            mode=Mode.SET,
            files={"z.go": [Block(1, 1, 1, 2, 1, 1)], "a.go": [Block(1, 1, 1, 2, 1, 0)]},
        )

        lines = ProfileWriter().generate(merged).splitlines()

        assert lines == ["mode: set", "a.go:1.1,1.2 1 0", "z.go:1.1,1.2 1 1"]

    def test_format_block(self) -> None:
        assert format_block("m/a.go", Block(10, 2, 12, 16, 2, 0)) == "m/a.go:10.2,12.16 2 0\n"


class TestEmptyMerge:
    """Tests for runs that produced no coverage."""

    def test_empty_by_default(self) -> None:
        assert ProfileWriter().generate(MergedProfile()) == ""

    def test_header_when_requested(self) -> None:
        assert ProfileWriter(header_when_empty=True).generate(MergedProfile()) == "mode: set\n"

    def test_header_names_configured_mode(self) -> None:
        writer = ProfileWriter(header_when_empty=True, default_mode=Mode.ATOMIC)

        assert writer.generate(MergedProfile()) == "mode: atomic\n"


class TestRoundTrip:
    """Parsing written output gives back the merged profile."""

    def test_parse_of_output_matches_merge(self, runs) -> None:
        merged = merge_profiles(runs)

        reparsed = parse_profile_text(ProfileWriter().generate(merged))

        assert reparsed == merged.profiles()

    def test_set_mode_round_trip(self, run_texts, as_mode) -> None:
        merged = merge_profiles(parse_profile_text(as_mode(t, "set")) for t in run_texts)

        reparsed = parse_profile_text(ProfileWriter().generate(merged))

        assert merge_profiles([reparsed]) == merged


class TestSave:
    """Tests for writing to disk."""

    def test_write_creates_parent_dirs(self, tmp_path: Path, runs) -> None:
        path = tmp_path / "out" / "coverage.out"

        saved = ProfileWriter().write(merge_profiles(runs), path)

        assert saved == path
        assert path.read_text().startswith("mode: count\n")

    def test_write_empty_creates_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "coverage.out"

        ProfileWriter().write(MergedProfile(), path)

        assert path.read_bytes() == b""

    def test_uses_unix_newlines(self, tmp_path: Path) -> None:
        path = ProfileWriter().save("mode: set\n", tmp_path / "c.out")

        assert path.read_bytes() == b"mode: set\n"
