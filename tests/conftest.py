"""Shared fixtures for struct2nest tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from struct2nest.codegen.core.config import load_config
from struct2nest.codegen.core.parser import TagParser
from struct2nest.codegen.languages.nestjs import NestJSGenerator


USER_SOURCE = """package models

import "time"

// User is a registered account.
type User struct {
	ID        string    `json:"id" bson:"_id"`
	Name      string    `json:"name,omitempty" bson:"name,omitempty"`
	Age       int       `json:"age" bson:"age"`
	Active    bool      `json:"active" bson:"active"`
	CreatedAt time.Time `json:"createdAt" bson:"createdAt"`
}
"""

ORDER_SOURCE = """package models

type Order struct {
	Total    float64 `json:"total" bson:"total"`
	Note     string  `json:"note,omitempty" bson:"note"`
}

type OrderLine struct {
	Sku string `json:"sku" bson:"sku"`
}
"""


@pytest.fixture
def parser() -> TagParser:
    return TagParser()


@pytest.fixture
def generator() -> NestJSGenerator:
    """Generator with the stock NestJS configuration."""
    return NestJSGenerator(load_config("nestjs"))


@pytest.fixture
def source_dir(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes ``{name: content}`` files into ``input/``."""

    def _write(files: dict[str, str]) -> Path:
        directory = tmp_path / "input"
        directory.mkdir(exist_ok=True)
        for name, content in files.items():
            (directory / name).write_text(content, encoding="utf-8")
        return directory

    return _write
