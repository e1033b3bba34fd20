"""
Layer rules for the tagging engine.

- Domain (models, reconstructor, game clock) imports nothing above it
- Engine and services reach stores only through EventStoreInterface
- Store adapters know nothing of the engine
- Nothing but the entry point imports the CLI
"""

import pytest
from pytestarch import LayerRule


def _forbid(layers, evaluable, source: str, target: str) -> None:
    rule = (
        LayerRule()
        .based_on(layers)
        .layers_that()
        .are_named(source)
        .should_not()
        .access_layers_that()
        .are_named(target)
    )
    rule.assert_applies(evaluable)


class TestLayerRules:
    """Dependency direction between the engine's layers."""

    @pytest.mark.parametrize("target", ["application", "infrastructure", "cli"])
    def test_domain_is_pure(self, evaluable, layers, target):
        """Domain imports only itself and the standard library."""
        _forbid(layers, evaluable, "domain", target)

    @pytest.mark.parametrize("target", ["infrastructure", "cli"])
    def test_application_uses_ports_only(self, evaluable, layers, target):
        """Engine and submission service never import a concrete store."""
        _forbid(layers, evaluable, "application", target)

    @pytest.mark.parametrize("target", ["application", "cli"])
    def test_store_adapters_are_leaves(self, evaluable, layers, target):
        """InMemoryEventStore and HttpEventStore depend on the domain port alone."""
        _forbid(layers, evaluable, "infrastructure", target)
