"""Tests for option loading and layering."""

from __future__ import annotations

import json

import pytest

from opencloud.config import load_config, merge_options, options_from_env


def test_load_config(tmp_path):
    path = tmp_path / "cloud.json"
    path.write_text(json.dumps({"authUrl": "http://keystone.test/v3"}), encoding="utf-8")
    assert load_config(path) == {"authUrl": "http://keystone.test/v3"}


def test_load_config_rejects_non_objects(tmp_path):
    path = tmp_path / "cloud.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError, match="JSON object"):
        load_config(path)


def test_merge_options_later_layers_win():
    merged = merge_options({"a": 1, "b": 1}, None, {"b": 2}, {})
    assert merged == {"a": 1, "b": 2}


def test_options_from_env_password_user():
    options = options_from_env({
        "OS_AUTH_URL": "http://keystone.test/v3",
        "OS_USERNAME": "demo",
        "OS_PASSWORD": "secret",
        "OS_USER_DOMAIN_NAME": "Default",
        "OS_PROJECT_NAME": "demo",
        "OS_PROJECT_DOMAIN_ID": "default",
        "OS_REGION_NAME": "RegionOne",
        "OS_INTERFACE": "internal",
    })
    assert options == {
        "authUrl": "http://keystone.test/v3",
        "region": "RegionOne",
        "urlType": "internal",
        "user": {"name": "demo", "password": "secret", "domain": {"name": "Default"}},
        "scope": {"project": {"name": "demo", "domain": {"id": "default"}}},
    }


def test_ids_do_not_need_domains():
    options = options_from_env({
        "OS_USER_ID": "u-1",
        "OS_USERNAME": "ignored",
        "OS_USER_DOMAIN_ID": "default",
        "OS_PROJECT_ID": "p-1",
        "OS_PROJECT_DOMAIN_ID": "default",
    })
    assert options == {"user": {"id": "u-1"}, "scope": {"project": {"id": "p-1"}}}


def test_empty_environment():
    assert options_from_env({}) == {}
