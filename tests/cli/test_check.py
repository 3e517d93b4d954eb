"""Tests for fkf check command."""

from __future__ import annotations

import json
import uuid
from pathlib import Path

from click.testing import CliRunner

from fkfactory.cli.main import cli

runner = CliRunner()

HEADER = '''
from dataclasses import dataclass
from typing import Annotated

from fkfactory import factory, fk, pk


@dataclass
class Tenant:
    id: int


@dataclass
class Account:
    id: int
    tenant_id: int
'''

GOOD = HEADER + '''

@factory(entity=Tenant)
class CheckedTenantFactory:
    id: Annotated[int, pk()]

    async def create(self, pool):
        return await self.build_with_fks(pool)


@factory(entity=Account)
class CheckedAccountFactory:
    id: Annotated[int, pk()]
    tenant_id: Annotated[int, fk(Tenant, "id", "CheckedTenantFactory")]
'''

DANGLING = HEADER + '''

@factory(entity=Account)
class DanglingAccountFactory:
    id: Annotated[int, pk()]
    tenant_id: Annotated[int, fk(Tenant, "id", "NeverDeclaredTenantFactory")]
'''

BROKEN = HEADER + '''

@factory(entity=Account)
class BrokenAccountFactory:
    id: Annotated[int, pk()]
    tenant_id: Annotated[int, fk(Tenant, "uuid", "CheckedTenantFactory")]
'''


def _write(tmp_path: Path, prefix: str, source: str) -> str:
    name = f"{prefix}_{uuid.uuid4().hex[:8]}"
    (tmp_path / f"{name}.py").write_text(source)
    return name


class TestCheckCommand:
    def test_given_valid_module_when_checked_then_ok(self, tmp_path: Path) -> None:
        # Given
        name = _write(tmp_path, "check_good", GOOD)

        # When
        result = runner.invoke(cli, ["check", name, "--path", str(tmp_path)])

        # Then
        assert result.exit_code == 0, result.output
        assert f"ok    {name}:CheckedTenantFactory" in result.output
        assert f"ok    {name}:CheckedAccountFactory" in result.output

    def test_given_dangling_named_target_when_checked_then_fails(self, tmp_path: Path) -> None:
        # Given
        name = _write(tmp_path, "check_dangling", DANGLING)

        # When
        result = runner.invoke(cli, ["check", name, "--path", str(tmp_path), "--json"])

        # Then
        assert result.exit_code == 1
        [row] = json.loads(result.stdout)
        assert row["factory"] == "DanglingAccountFactory"
        assert row["ok"] is False
        assert "NeverDeclaredTenantFactory" in row["error"]

    def test_given_schema_error_at_import_when_checked_then_module_fails(
        self, tmp_path: Path
    ) -> None:
        # Given
        name = _write(tmp_path, "check_broken", BROKEN)

        # When
        result = runner.invoke(cli, ["check", name, "--path", str(tmp_path)])

        # Then
        assert result.exit_code == 1
        assert f"FAIL  {name}:{name}:" in result.output
        assert "SCHEMA_UNKNOWN_TARGET_FIELD" in result.output
