from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect
from sqlalchemy.dialects import mysql
from sqlalchemy.schema import CreateTable

from models.product import Product

BACKEND_DIR = Path(__file__).resolve().parents[1]
TABLE = "Final_Tic_Jum_Inventory"


def _alembic_config(url: str) -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", str(BACKEND_DIR / "alembic"))
    cfg.set_main_option("sqlalchemy.url", url)
    return cfg


def test_upgrade_and_downgrade(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    cfg = _alembic_config(url)

    command.upgrade(cfg, "head")
    engine = create_engine(url)
    try:
        columns = {c["name"] for c in inspect(engine).get_columns(TABLE)}
        assert columns == {c.name for c in Product.__table__.columns}

        command.downgrade(cfg, "base")
        assert TABLE not in inspect(engine).get_table_names()
    finally:
        engine.dispose()


def test_price_is_double_precision_on_mysql():
    ddl = str(CreateTable(Product.__table__).compile(dialect=mysql.dialect()))
    assert "`Tic_jum_Price_Unit` FLOAT(53)" in ddl
