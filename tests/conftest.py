"""Shared fixtures for sweet shop tests."""

import json
from pathlib import Path
from typing import (
    Any,
    Dict,
    List,
)

import pytest

from sweet_shop.backends import (
    JsonFileBackend,
    MemoryBackend,
)
from sweet_shop.models import (
    SEED_SWEETS,
    Sweet,
)
from sweet_shop.storage import SweetStorage


@pytest.fixture
def memory_backend() -> MemoryBackend:
    """Empty in-memory backend."""
    return MemoryBackend()


@pytest.fixture
def storage(memory_backend: MemoryBackend) -> SweetStorage:
    """Storage engine over an empty in-memory backend (first load seeds it)."""
    return SweetStorage(memory_backend)


@pytest.fixture
def file_storage(tmp_path: Path) -> SweetStorage:
    """Storage engine writing JSON files under a temporary directory."""
    return SweetStorage(JsonFileBackend(tmp_path / "data"))


@pytest.fixture
def seed() -> List[Sweet]:
    """Copy of the seed dataset."""
    return [sweet.model_copy() for sweet in SEED_SWEETS]


@pytest.fixture
def sample_sweets() -> List[Sweet]:
    """A mixed collection with a low-stock item and a shared category."""
    return [
        Sweet(id=1, name="Rasgulla", category="Milk-Based", price=12, quantity=30),
        Sweet(id=2, name="Jalebi", category="Fried", price=8.5, quantity=5),
        Sweet(id=3, name="Barfi", category="Milk-Based", price=25, quantity=9),
        Sweet(id=4, name="Mysore Pak", category="Gram-Based", price=40, quantity=12),
    ]


@pytest.fixture
def sample_config_dict(tmp_path: Path) -> Dict[str, Any]:
    """File-backed configuration pointing into a temporary directory."""
    return {
        "backend": "file",
        "data_dir": str(tmp_path / "data"),
        "storage_key": "test_inventory",
        "log_level": "DEBUG",
    }


@pytest.fixture
def sample_config_file(tmp_path: Path, sample_config_dict: Dict[str, Any]) -> Path:
    """The sample configuration written to a JSON file."""
    config_file = tmp_path / "sweet_shop.json"
    config_file.write_text(json.dumps(sample_config_dict))
    return config_file
