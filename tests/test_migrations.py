from pathlib import Path

from alembic import command
from alembic.config import Config

ROOT = Path(__file__).resolve().parent.parent


def _config() -> Config:
    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "migrations"))
    return cfg


def test_offline_upgrade_renders_schema(capsys):
    command.upgrade(_config(), "head", sql=True)
    sql = capsys.readouterr().out

    assert "CREATE TABLE service_bookings" in sql
    assert "CREATE TABLE slot_blocks" in sql
    assert "ck_slot_blocks_start_before_end" in sql
    assert "uq_service_bookings_active_slot" in sql
