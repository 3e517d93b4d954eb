"""Tests for fkf inspect command."""

from __future__ import annotations

import json
import uuid
from pathlib import Path

import pytest
from click.testing import CliRunner

from fkfactory.cli.main import cli

runner = CliRunner()

SAMPLE = '''
from dataclasses import dataclass
from typing import Annotated

from fkfactory import NO_DEFAULT, factory, fk, pk, required


@dataclass
class Practice:
    id: int


@dataclass
class Patient:
    id: int
    practice_id: int | None
    referrer_id: int | None
    first_name: str
    nickname: str | None


@factory(entity=Practice)
class PracticeFactory:
    id: Annotated[int, pk()]

    async def create(self, pool):
        return await self.build_with_fks(pool)


@factory(entity=Patient)
class PatientFactory:
    id: Annotated[int, pk()]
    practice_id: Annotated[int | None, fk(Practice, "id", PracticeFactory)]
    referrer_id: Annotated[int | None, fk(Practice, "id", PracticeFactory, NO_DEFAULT)]
    first_name: Annotated[str | None, required()] = "Auto-Generated"
    nickname: str | None = None
'''


@pytest.fixture
def sample_module(tmp_path: Path) -> tuple[Path, str]:
    """Write a factories module with a unique name into tmp_path."""
    name = f"inspect_sample_{uuid.uuid4().hex[:8]}"
    (tmp_path / f"{name}.py").write_text(SAMPLE)
    return tmp_path, name


class TestInspectCommand:
    def test_given_factory_when_inspected_as_json_then_fields_described(
        self, sample_module: tuple[Path, str]
    ) -> None:
        # Given
        path, name = sample_module

        # When
        result = runner.invoke(
            cli, ["inspect", f"{name}:PatientFactory", "--path", str(path), "--json"]
        )

        # Then
        assert result.exit_code == 0, result.output
        info = json.loads(result.stdout)
        assert info["factory"] == "PatientFactory"
        assert info["entity"] == "Patient"
        fields = {row["name"]: row for row in info["fields"]}
        assert list(fields) == ["id", "practice_id", "referrer_id", "first_name", "nickname"]
        assert fields["id"]["kind"] == "pk"
        assert fields["id"]["setters"] == []
        assert fields["practice_id"]["setters"] == ["with_practice", "with_practice_id"]
        assert fields["practice_id"]["target"] == "Practice.id via PracticeFactory"
        assert fields["referrer_id"]["target"] == "Practice.id via PracticeFactory (no_default)"
        assert fields["first_name"]["kind"] == "required"
        assert fields["first_name"]["unwrap_required"] is True
        assert fields["nickname"]["kind"] == "optional"
        assert fields["nickname"]["optional"] is True

    def test_given_factory_when_inspected_then_table_printed(
        self, sample_module: tuple[Path, str]
    ) -> None:
        # Given
        path, name = sample_module

        # When
        result = runner.invoke(cli, ["inspect", f"{name}:PatientFactory", "--path", str(path)])

        # Then
        assert result.exit_code == 0, result.output
        assert "PatientFactory -> Patient" in result.output
        assert "practice_id" in result.output
