"""Tests for ConstraintEncoder."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from archctl.config.models import EncoderConfig
from archctl.domain.constraints import DomainIsolation, LayerDependency, NamingConvention
from archctl.domain.errors import EncodingError
from archctl.domain.types import Layer, NamingPattern
from archctl.services.encoder import ConstraintEncoder


@pytest.fixture
def encoder() -> ConstraintEncoder:
    return ConstraintEncoder()


class TestLayerDependency:
    def test_domain_layer_forbids_application_and_infrastructure(
        self, encoder: ConstraintEncoder
    ) -> None:
        source = encoder.encode(LayerDependency(layer=Layer.DOMAIN, domain="user"))
        assert "func TestLayerDependencies(t *testing.T) {" in source
        assert source.count('ResideInNamespace("internal/user/domain")') == 2
        assert 'HaveDependencyOn("internal/user/application")' in source
        assert 'HaveDependencyOn("internal/user/infrastructure")' in source
        assert 't.Run("domain_must_not_depend_on_application"' in source

    def test_application_layer(self, encoder: ConstraintEncoder) -> None:
        source = encoder.encode(LayerDependency(layer=Layer.APPLICATION, domain="order"))
        assert 'ResideInNamespace("internal/order/application")' in source
        assert 'HaveDependencyOn("internal/order/infrastructure")' in source
        assert "internal/order/domain" not in source

    def test_infrastructure_needs_no_test(self, encoder: ConstraintEncoder) -> None:
        assert encoder.encode(LayerDependency(layer=Layer.INFRASTRUCTURE, domain="user")) == ""

    def test_invalid_domain_name(self, encoder: ConstraintEncoder) -> None:
        with pytest.raises(EncodingError, match="domain is not a valid domain name"):
            encoder.encode(LayerDependency(layer=Layer.DOMAIN, domain="../etc"))

    def test_unknown_layer_never_reaches_encoder(self) -> None:
        with pytest.raises(ValidationError):
            LayerDependency(layer="admin", domain="user")

    def test_string_layer_encodes_like_enum(self, encoder: ConstraintEncoder) -> None:
        by_value = encoder.encode(LayerDependency(layer="domain", domain="user"))
        assert by_value == encoder.encode(LayerDependency(layer=Layer.DOMAIN, domain="user"))

    def test_imports(self, encoder: ConstraintEncoder) -> None:
        source = encoder.encode(LayerDependency(layer=Layer.DOMAIN, domain="user"))
        assert "package archtest" in source
        assert '"github.com/solrac97gr/goarchtest"' in source
        assert '"github.com/stretchr/testify/assert"' in source


class TestDomainIsolation:
    def test_source_must_not_depend_on_target(self, encoder: ConstraintEncoder) -> None:
        source = encoder.encode(DomainIsolation(source_domain="order", target_domain="user"))
        assert "func TestDomainIsolation(t *testing.T) {" in source
        assert 'ResideInNamespace("internal/order/")' in source
        assert 'HaveDependencyOn("internal/user/")' in source
        assert 't.Run("order_must_not_depend_on_user"' in source

    def test_same_domain_rejected(self, encoder: ConstraintEncoder) -> None:
        with pytest.raises(EncodingError, match="must be different"):
            encoder.encode(DomainIsolation(source_domain="user", target_domain="user"))

    def test_invalid_target(self, encoder: ConstraintEncoder) -> None:
        with pytest.raises(EncodingError, match="targetDomain is not a valid domain name"):
            encoder.encode(DomainIsolation(source_domain="user", target_domain="a/b"))


class TestNamingConvention:
    @pytest.mark.parametrize(
        ("pattern", "namespace", "suffix"),
        [
            (NamingPattern.REPOSITORY, "internal/*/domain", "Repository"),
            (NamingPattern.USECASE, "internal/*/application/usecase", "UseCase"),
            (NamingPattern.HANDLER, "internal/*/infrastructure/http", "Handler"),
        ],
    )
    def test_patterns(
        self, encoder: ConstraintEncoder, pattern: NamingPattern, namespace: str, suffix: str
    ) -> None:
        source = encoder.encode(NamingConvention(pattern=pattern))
        assert "func TestNaming(t *testing.T) {" in source
        assert f'ResideInNamespace("{namespace}")' in source
        assert "Should()." in source
        assert f'HaveNameEndingWith("{suffix}")' in source


class TestConfiguration:
    def test_custom_namespace_root_and_package(self) -> None:
        encoder = ConstraintEncoder(EncoderConfig(namespace_root="pkg", package_name="arch"))
        source = encoder.encode(LayerDependency(layer=Layer.APPLICATION, domain="billing"))
        assert "package arch\n" in source
        assert 'ResideInNamespace("pkg/billing/application")' in source

    def test_deterministic(self, encoder: ConstraintEncoder) -> None:
        c = DomainIsolation(source_domain="order", target_domain="user")
        assert encoder.encode(c) == encoder.encode(c)
