"""Tests for frontmatter parsing, checksums and version comparison."""

import pytest

from claude_workflows.utils import (
    Frontmatter,
    calculate_content_checksum,
    file_name_from_path,
    is_newer_version,
    parse_frontmatter,
    parse_version,
)


class TestParseFrontmatter:
    """Test version frontmatter parsing."""

    def test_version_and_updated(self):
        content = "---\nversion: 0.1.0\nupdated: 2026-01-30\n---\n# Content"
        assert parse_frontmatter(content) == Frontmatter(version="0.1.0", updated="2026-01-30")

    def test_missing_updated_defaults_to_empty(self):
        content = "---\nversion: 1.2.3\n---\n# Content"
        assert parse_frontmatter(content) == Frontmatter(version="1.2.3", updated="")

    def test_no_frontmatter_block(self):
        assert parse_frontmatter("# Just markdown\n\nversion: 1.0.0") is None

    def test_missing_version(self):
        content = "---\nupdated: 2026-01-30\ndescription: Something\n---\n# Content"
        assert parse_frontmatter(content) is None

    def test_unterminated_block(self):
        content = "---\nversion: 0.1.0\nupdated: 2026-01-30\n# Content"
        assert parse_frontmatter(content) is None

    def test_leading_content_before_block(self):
        content = "\n---\nversion: 0.1.0\n---\n# Content"
        assert parse_frontmatter(content) is None

    def test_leading_whitespace_before_block(self):
        assert parse_frontmatter("  ---\nversion: 0.1.0\n---\n") is None

    def test_crlf_line_endings(self):
        content = "---\r\nversion: 0.2.0\r\nupdated: 2026-02-01\r\n---\r\n# Content\r\n"
        assert parse_frontmatter(content) == Frontmatter(version="0.2.0", updated="2026-02-01")

    def test_values_are_trimmed(self):
        content = "---\nversion:    0.3.0   \nupdated:   2026-03-01  \n---\n"
        assert parse_frontmatter(content) == Frontmatter(version="0.3.0", updated="2026-03-01")

    def test_unknown_fields_ignored(self):
        content = "---\ntitle: TDD\nversion: 0.1.0\ntags: [a, b\n---\nbody"
        assert parse_frontmatter(content).version == "0.1.0"

    def test_block_at_end_of_content(self):
        assert parse_frontmatter("---\nversion: 2.0.0\n---") == Frontmatter("2.0.0", "")

    def test_closing_delimiter_must_be_exact(self):
        assert parse_frontmatter("---\nversion: 0.1.0\n----\nbody") is None

    def test_version_outside_block_is_ignored(self):
        content = "---\ntitle: x\n---\nversion: 9.9.9\n"
        assert parse_frontmatter(content) is None

    def test_empty_version_value(self):
        assert parse_frontmatter("---\nversion:\nupdated: 2026-01-01\n---\n") is None


class TestChecksum:
    """Test content checksums."""

    def test_deterministic(self):
        content = "---\nversion: 0.1.0\n---\n# Content"
        assert calculate_content_checksum(content) == calculate_content_checksum(content)

    def test_sha256_hex(self):
        assert calculate_content_checksum("") == (
            "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )

    def test_whitespace_change_detected(self):
        assert calculate_content_checksum("# Title\n") != calculate_content_checksum("# Title\n\n")

    def test_frontmatter_change_detected(self):
        a = "---\nversion: 0.1.0\n---\nbody"
        b = "---\nversion: 0.1.1\n---\nbody"
        assert calculate_content_checksum(a) != calculate_content_checksum(b)

    def test_line_endings_not_normalized(self):
        assert calculate_content_checksum("a\nb") != calculate_content_checksum("a\r\nb")

    def test_unicode_content(self):
        assert len(calculate_content_checksum("Überprüfung ✓")) == 64


class TestVersionComparison:
    """Test three-part version comparison."""

    @pytest.mark.parametrize("version", ["0.1.0", "1.0.0", "10.20.30", "", "garbage"])
    def test_equal_versions_not_newer(self, version):
        assert is_newer_version(version, version) is False

    @pytest.mark.parametrize("local,remote", [
        ("0.1.0", "0.2.0"),
        ("0.1.0", "0.1.1"),
        ("0.9.9", "1.0.0"),
        ("0.9.0", "0.10.0"),
        ("1.2.3", "2.0.0"),
    ])
    def test_newer(self, local, remote):
        assert is_newer_version(local, remote) is True
        assert is_newer_version(remote, local) is False

    def test_numeric_not_lexicographic(self):
        assert is_newer_version("0.9.0", "0.10.0") is True

    def test_missing_segments_are_zero(self):
        assert parse_version("1") == (1, 0, 0)
        assert parse_version("1.2") == (1, 2, 0)
        assert is_newer_version("1", "1.0.0") is False
        assert is_newer_version("1.0", "1.0.1") is True

    def test_non_numeric_segments_are_zero(self):
        assert parse_version("x.y.z") == (0, 0, 0)
        assert parse_version("1.beta.3") == (1, 0, 3)
        assert is_newer_version("garbage", "0.0.1") is True

    def test_prerelease_suffix_ignored(self):
        assert parse_version("1.2.3-beta") == (1, 2, 3)
        assert is_newer_version("1.2.3", "1.2.3-beta") is False

    def test_extra_segments_ignored(self):
        assert parse_version("1.2.3.4") == (1, 2, 3)


class TestFileNameFromPath:
    def test_basename(self):
        assert file_name_from_path("stacks/python/code-style.md") == "code-style.md"

    def test_plain_name(self):
        assert file_name_from_path("tdd.md") == "tdd.md"
