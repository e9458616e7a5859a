"""Tests for the Go test source builder."""

from __future__ import annotations

import pytest

from archctl.infrastructure.codegen import (
    PROJECT_PATH_ENV,
    ArchRule,
    GoTestFileBuilder,
    go_quote,
)


class TestGoQuote:
    def test_plain(self) -> None:
        assert go_quote("internal/user") == '"internal/user"'

    def test_escapes_quotes_and_backslashes(self) -> None:
        assert go_quote('a"b\\c') == '"a\\"b\\\\c"'

    def test_escapes_control_characters(self) -> None:
        assert go_quote("a\nb\tc\x01") == '"a\\nb\\tc\\x01"'

    def test_keeps_unicode(self) -> None:
        assert go_quote("usuário") == '"usuário"'


class TestArchRule:
    def test_forbid_dependency(self) -> None:
        rule = ArchRule.forbid_dependency(
            "internal/user/domain", "internal/user/application", name="n"
        )
        assert rule.negate is True
        assert rule.predicate == "HaveDependencyOn"
        assert rule.message == "internal/user/domain must not depend on internal/user/application"

    def test_require_suffix(self) -> None:
        rule = ArchRule.require_suffix("internal/*/domain", "Repository", name="n")
        assert rule.negate is False
        assert rule.predicate == "HaveNameEndingWith"
        assert rule.argument == "Repository"

    def test_render_chain(self) -> None:
        rule = ArchRule.forbid_dependency("internal/a/", "internal/b/", name="a_must_not_depend_on_b")
        text = "\n".join(rule.render())
        assert '\tt.Run("a_must_not_depend_on_b", func(t *testing.T) {' in text
        assert 'ResideInNamespace("internal/a/")' in text
        assert "ShouldNot()." in text
        assert 'HaveDependencyOn("internal/b/")' in text
        assert "assert.True(t, result.IsSuccessful," in text

    def test_render_quotes_untrusted_values(self) -> None:
        rule = ArchRule.forbid_dependency('x")\nos.Exit(1)//', "y", name="n")
        text = "\n".join(rule.render())
        assert 'ResideInNamespace("x\\")\\nos.Exit(1)//")' in text


class TestGoTestFileBuilder:
    def _rule(self) -> ArchRule:
        return ArchRule.require_suffix("internal/*/domain", "Repository", name="repository_suffix")

    def test_empty_renders_nothing(self) -> None:
        builder = GoTestFileBuilder("archtest")
        assert builder.empty
        assert builder.render() == ""

    def test_full_file(self) -> None:
        source = (
            GoTestFileBuilder("archtest")
            .add_imports("github.com/solrac97gr/goarchtest", "github.com/stretchr/testify/assert")
            .add_test("TestNaming", [self._rule()])
            .render()
        )
        assert source.startswith("// Code generated by archctl. DO NOT EDIT.\n")
        assert "package archtest\n" in source
        assert '\t"github.com/solrac97gr/goarchtest"' in source
        assert '\t"path/filepath"' in source
        assert "func TestNaming(t *testing.T) {" in source
        assert f'os.Getenv("{PROJECT_PATH_ENV}")' in source
        assert source.endswith("}\n")

    def test_imports_deduplicated(self) -> None:
        builder = GoTestFileBuilder("archtest").add_imports("testing", "os", "fmt")
        builder.add_test("TestX", [self._rule()])
        assert builder.render().count('"testing"') == 1
        assert '\t"fmt"' in builder.render()

    def test_rejects_bad_package(self) -> None:
        with pytest.raises(ValueError, match="Not a Go identifier"):
            GoTestFileBuilder("arch-test")

    def test_rejects_non_test_function(self) -> None:
        with pytest.raises(ValueError, match="must start with 'Test'"):
            GoTestFileBuilder("archtest").add_test("CheckNaming", [self._rule()])

    def test_rejects_empty_rules(self) -> None:
        with pytest.raises(ValueError, match="at least one rule"):
            GoTestFileBuilder("archtest").add_test("TestNaming", [])
