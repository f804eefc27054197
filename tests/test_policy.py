from __future__ import annotations

import pytest

from dugout.core import GenerationPolicy, default_generation_policy, policy_from_config


def test_default_policy_allows_one_thousand_attempts():
    assert default_generation_policy().max_attempts == 1000


def test_policy_from_config():
    assert policy_from_config({"max_attempts": 50}) == GenerationPolicy(max_attempts=50)
    assert policy_from_config({}) == default_generation_policy()


def test_policy_rejects_bad_config():
    with pytest.raises(ValueError, match="unknown generation policy keys"):
        policy_from_config({"attempts": 5})
    with pytest.raises(ValueError, match="at least 1"):
        policy_from_config({"max_attempts": 0})
