"""Tests for centralsync.workspace."""

from __future__ import annotations

import logging

import pytest

from centralsync.central import CentralInstance
from centralsync.config import ProviderConfig
from centralsync.external import CentralInstanceConnector, CentralInstanceExternal
from centralsync.reconciler import Action
from centralsync.workspace import Workspace


def _central_block(name: str, **attrs) -> dict:
    body = {"cloud_provider": "aws", "region": "us-east-1", "multi_az": True}
    body.update(attrs)
    return {name: body}


class TestWorkspaceConstruction:
    def test_empty_workspace_len(self):
        assert len(Workspace()) == 0

    def test_empty_workspace_iter(self):
        assert list(Workspace()) == []

    def test_empty_workspace_contains(self):
        assert "anything" not in Workspace()

    def test_getitem_empty_raises(self):
        with pytest.raises(KeyError):
            Workspace()["missing"]

    def test_get_empty_returns_none(self):
        assert Workspace().get("missing") is None

    def test_repr_empty(self):
        ws = Workspace()
        assert "Workspace" in repr(ws)
        assert "resources=0" in repr(ws)
        assert "provider_configs=0" in repr(ws)


class TestWorkspaceLoad:
    def test_load_central_instance(self):
        ws = Workspace()
        ws.load({"central_instance": [_central_block("c1")]})
        assert "c1" in ws
        assert isinstance(ws["c1"], CentralInstance)
        assert ws["c1"].for_provider.region == "us-east-1"

    def test_load_provider_config(self):
        ws = Workspace()
        ws.load({"provider_config": [{"staging": {"endpoint": "https://fleet.example.com"}}]})
        assert ws.provider_configs["staging"].endpoint == "https://fleet.example.com"

    def test_load_accumulates(self):
        ws = Workspace()
        ws.load({"central_instance": [_central_block("c1")]})
        ws.load({"central_instance": [_central_block("c2")]})
        assert sorted(ws) == ["c1", "c2"]

    def test_duplicate_resource_raises(self):
        ws = Workspace()
        ws.load({"central_instance": [_central_block("c1")]})
        with pytest.raises(ValueError, match="Duplicate resource: 'c1'"):
            ws.load({"central_instance": [_central_block("c1")]})

    def test_duplicate_provider_config_raises(self):
        ws = Workspace()
        ws.add(ProviderConfig(name="default"))
        with pytest.raises(ValueError, match="Duplicate provider config"):
            ws.add(ProviderConfig(name="default"))

    def test_unknown_blocks_ignored(self):
        ws = Workspace()
        ws.load({"something_else": [{"x": {}}]})
        assert len(ws) == 0

    def test_env_var_expansion(self, monkeypatch):
        monkeypatch.setenv("CENTRALSYNC_REGION", "eu-west-1")
        ws = Workspace()
        ws.load({"central_instance": [_central_block("c1", region="${env.CENTRALSYNC_REGION}")]})
        assert ws["c1"].for_provider.region == "eu-west-1"

    def test_unset_env_var_warns(self, monkeypatch, caplog):
        monkeypatch.delenv("CENTRALSYNC_NONEXISTENT", raising=False)
        ws = Workspace()
        with caplog.at_level(logging.WARNING, logger="centralsync.workspace"):
            ws.load({"provider_config": [{"p": {"endpoint": "${env.CENTRALSYNC_NONEXISTENT}"}}]})
        assert ws.provider_configs["p"].endpoint == ""
        assert "CENTRALSYNC_NONEXISTENT" in caplog.text

    def test_unknown_variable_left_alone(self):
        ws = Workspace()
        ws.load({"central_instance": [_central_block("c1", region="${nope}")]})
        assert ws["c1"].for_provider.region == "${nope}"


class TestWorkspaceFilter:
    def test_preserves_order(self):
        ws = Workspace()
        ws.load({"central_instance": [_central_block("a"), _central_block("b")]})
        assert [r.name for r in ws.filter(["b", "a"])] == ["b", "a"]

    def test_skips_missing(self):
        ws = Workspace()
        ws.load({"central_instance": [_central_block("a")]})
        assert [r.name for r in ws.filter(["missing", "a"])] == ["a"]


class TestWorkspaceReconcile:
    @pytest.fixture
    def connected(self, monkeypatch, fake_client):
        def connect(self, ctx):
            return CentralInstanceExternal(fake_client)

        monkeypatch.setattr(CentralInstanceConnector, "connect", connect)
        return fake_client

    def test_reconciles_every_resource(self, connected):
        ws = Workspace()
        ws.load({"central_instance": [_central_block("a"), _central_block("b")]})
        results = ws.reconcile()
        assert results == {"a": Action.CREATE, "b": Action.CREATE}
        assert ws["a"].bound and ws["b"].bound

    def test_reconciles_selected(self, connected):
        ws = Workspace()
        ws.load({"central_instance": [_central_block("a"), _central_block("b")]})
        assert ws.reconcile(["b"]) == {"b": Action.CREATE}
        assert ws["a"].bound is False

    def test_dry_run_passed_to_context(self, connected):
        ws = Workspace()
        ws.load({"central_instance": [_central_block("a")]})
        assert ws.reconcile(dry_run=True) == {"a": Action.CREATE}
        assert connected.calls == []
