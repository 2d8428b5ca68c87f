"""CLI tools for ESMS administration."""

import click
from sqlalchemy import select

from esms.core.resources import RESOURCES
from esms.core.structured_logging import configure_logging
from esms.db.base import Base
from esms.db.models import Department, DocumentType, EnvironmentalFactor
from esms.db.session import SessionLocal, engine
from esms.services import storage_service
from esms.services.resource_mapping import storage_column_names

DEFAULT_DEPARTMENTS = [
    ("Environment", "Environmental management and monitoring"),
    ("Health and Safety", "Occupational health and safety"),
    ("Social", "Community relations and stakeholder engagement"),
    ("Human Resources", "Recruitment, training and worker welfare"),
]
DEFAULT_ENVIRONMENTAL_FACTORS = [
    "Air quality",
    "Water resources",
    "Soil",
    "Noise and vibration",
    "Biodiversity",
    "Waste",
]
DEFAULT_DOCUMENT_TYPES = ["Policy", "Procedure", "Plan", "Form", "Report", "Record"]


@click.group()
def cli():
    """ESMS CLI tools."""
    configure_logging()


@cli.command()
def init_db():
    """Create all tables that do not exist yet (use Alembic for upgrades)."""
    Base.metadata.create_all(bind=engine)
    click.echo(f"✓ Database ready ({len(Base.metadata.tables)} tables)")


@cli.command()
@click.option("--columns", is_flag=True, help="Show external → storage column names")
def list_resources(columns: bool):
    """List registered resources and their API paths."""
    for name, definition in sorted(RESOURCES.items()):
        click.echo(f"/api/{name}  {definition.model.__name__}")
        if columns:
            for external, storage in storage_column_names(definition.model).items():
                click.echo(f"    {external} → {storage}")


@cli.command()
@click.option("--limit", default=100, show_default=True, help="Maximum queued deletions to retry")
def retry_file_deletions(limit: int):
    """Retry attachment deletions that failed after commit."""
    db = SessionLocal()
    try:
        deleted, failed = storage_service.retry_pending_deletions(db, limit=limit)
        click.echo(f"✓ Deleted {deleted} file(s)")
        if failed:
            click.echo(f"❌ {failed} file(s) still failing")
    except Exception as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
        raise SystemExit(1)
    finally:
        db.close()


@cli.command()
def seed_lookups():
    """Insert default departments, environmental factors and document types."""
    db = SessionLocal()
    try:
        created = 0
        for name, description in DEFAULT_DEPARTMENTS:
            if db.scalar(select(Department.id).where(Department.name == name)) is None:
                db.add(Department(name=name, description=description))
                created += 1
        for description in DEFAULT_ENVIRONMENTAL_FACTORS:
            exists = db.scalar(
                select(EnvironmentalFactor.id).where(EnvironmentalFactor.description == description)
            )
            if exists is None:
                db.add(EnvironmentalFactor(description=description))
                created += 1
        for description in DEFAULT_DOCUMENT_TYPES:
            exists = db.scalar(select(DocumentType.id).where(DocumentType.description == description))
            if exists is None:
                db.add(DocumentType(description=description))
                created += 1
        db.commit()
        click.echo(f"✓ Seeded {created} lookup record(s)")
    except Exception as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
        raise SystemExit(1)
    finally:
        db.close()


if __name__ == "__main__":
    cli()
