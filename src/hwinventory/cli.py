"""hwinventory CLI - Typer-based command line interface."""

import json
import logging
import os
from datetime import date
from pathlib import Path
from typing import Annotated

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hwinventory.config import Settings, load_settings
from hwinventory.engine.status import describe_days_remaining, status_label
from hwinventory.errors import InventoryError
from hwinventory.models.asset import (
    Asset,
    AssetInput,
    AssetStatus,
    AssetUpdate,
    MaintenanceContract,
    ProfessionalSupport,
)
from hwinventory.store.inventory import InventoryStore
from hwinventory.store.persistence import JsonFilePersistence

app = typer.Typer(
    name="hwinventory",
    help="Hardware inventory - track lifecycle dates, contracts and asset health",
    no_args_is_help=True,
)

console = Console()

STATUS_STYLES = {
    AssetStatus.HEALTHY: "green",
    AssetStatus.WARNING: "yellow",
    AssetStatus.CRITICAL: "red",
}

ConfigOption = Annotated[
    Path | None, typer.Option("--config", "-c", help="Path to settings file")
]
JsonOption = Annotated[bool, typer.Option("--json", help="Output as JSON")]


@app.callback()
def main() -> None:
    """Configure logging for every command."""
    log_level = os.environ.get("HWINVENTORY_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _open_store(config: Path | None) -> tuple[InventoryStore, Settings]:
    """Build settings and a store backed by the configured data directory."""
    try:
        settings = load_settings(config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error reading settings:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    persistence = JsonFilePersistence(settings.data_dir, settings.storage_key)
    store = InventoryStore(persistence, threshold_days=settings.threshold_days)
    store.load()
    if store.recovered_from_corruption:
        console.print(
            f"[yellow]Warning:[/yellow] could not read {escape(str(persistence.path))}"
        )
        console.print("Sample data has been restored.")
    return store, settings


def _fail(message: str) -> typer.Exit:
    console.print(f"[red]Error:[/red] {escape(message)}")
    return typer.Exit(1)


def _dump(asset: Asset) -> dict:
    return asset.model_dump(mode="json", by_alias=True)


def _status_markup(status: AssetStatus) -> str:
    style = STATUS_STYLES.get(status, "white")
    return f"[{style}]{status_label(status)}[/{style}]"


def _check_category(category: str | None, settings: Settings) -> None:
    if category is not None and category not in settings.categories:
        raise _fail(
            f"Unknown category: {category}. Available: {', '.join(settings.categories)}"
        )


@app.command()
def init(
    output: Annotated[Path, typer.Option("--output", "-o", help="Output file path")] = Path(
        "hwinventory.yaml"
    ),
    data_dir: Annotated[
        Path | None, typer.Option("--data-dir", help="Directory for the inventory record")
    ] = None,
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite existing file")] = False,
) -> None:
    """Write a starter settings file."""
    if output.exists() and not force:
        console.print(
            f"[red]Error:[/red] File {escape(str(output))} already exists. "
            "Use --force to overwrite."
        )
        raise typer.Exit(1)

    settings = Settings() if data_dir is None else Settings(data_dir=data_dir)
    settings.to_yaml(output)
    console.print(f"[green]Created[/green] {escape(str(output))}")
    console.print("\nNext steps:")
    console.print(f"  1. Export HWINVENTORY_CONFIG={escape(str(output))} or run commands next to it")
    console.print("  2. Run 'hwinventory add' to record hardware")
    console.print("  3. Run 'hwinventory list' to review asset health")


@app.command("list")
def list_assets(
    status: Annotated[
        AssetStatus | None, typer.Option("--status", "-s", help="Only assets with this status")
    ] = None,
    category: Annotated[
        str | None, typer.Option("--category", help="Only assets in this category")
    ] = None,
    search: Annotated[
        str | None,
        typer.Option("--search", "-q", help="Match name, vendor, model or serial number"),
    ] = None,
    config: ConfigOption = None,
    json_output: JsonOption = False,
) -> None:
    """List assets, optionally filtered."""
    store, settings = _open_store(config)
    _check_category(category, settings)

    assets = store.query(status=status, category=category, search=search)
    total = len(store.assets)

    if json_output:
        print(json.dumps([_dump(a) for a in assets], indent=2))
        return

    if not assets:
        console.print(f"No matching assets (0 of {total} items)")
        return

    today = date.today()
    table = Table(title="Hardware Inventory")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Vendor / Model")
    table.add_column("Category")
    table.add_column("Serial")
    table.add_column("Warranty", justify="right")
    table.add_column("End of Life", justify="right")
    table.add_column("Status")

    for asset in assets:
        table.add_row(
            asset.id[:8],
            escape(asset.name),
            escape(f"{asset.vendor} {asset.model}"),
            escape(str(asset.category)),
            escape(asset.serial_number),
            describe_days_remaining(asset.warranty_expiry, today, settings.threshold_days),
            describe_days_remaining(asset.end_of_life, today, settings.threshold_days),
            _status_markup(asset.status),
        )

    console.print(table)
    console.print(f"{len(assets)} of {total} items")


@app.command()
def show(
    asset_id: Annotated[str, typer.Argument(help="Asset ID")],
    config: ConfigOption = None,
    json_output: JsonOption = False,
) -> None:
    """Show a single asset."""
    store, settings = _open_store(config)
    try:
        asset = store.get(asset_id)
    except InventoryError as e:
        raise _fail(str(e))

    if json_output:
        print(json.dumps(_dump(asset), indent=2))
        return

    today = date.today()
    table = Table(title=escape(asset.name), show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("ID", asset.id)
    table.add_row("Status", _status_markup(asset.status))
    table.add_row("Vendor", escape(asset.vendor))
    table.add_row("Model", escape(asset.model))
    table.add_row("Serial", escape(asset.serial_number))
    table.add_row("Category", escape(str(asset.category)))
    table.add_row("Unit cost", f"{asset.unit_cost:.2f}" if asset.unit_cost is not None else "-")
    table.add_row("Purchased", asset.purchase_date.isoformat())
    table.add_row(
        "Warranty",
        f"{asset.warranty_expiry.isoformat()} "
        f"({describe_days_remaining(asset.warranty_expiry, today, settings.threshold_days)})",
    )
    table.add_row(
        "End of life",
        f"{asset.end_of_life.isoformat()} "
        f"({describe_days_remaining(asset.end_of_life, today, settings.threshold_days)})",
    )

    contract = asset.maintenance_contract
    if contract.has_contract:
        expiry = contract.expiry_date.isoformat() if contract.expiry_date else "no expiry"
        table.add_row("Maintenance", escape(f"{contract.provider or '-'} until {expiry}"))
    else:
        table.add_row("Maintenance", "[dim]none[/dim]")

    support = asset.professional_support
    if support.has_support:
        table.add_row(
            "Support", escape(f"{support.provider or '-'} ({support.contact_info or '-'})")
        )
    else:
        table.add_row("Support", "[dim]none[/dim]")

    for kind, reference in asset.documents.items():
        table.add_row(f"Document: {kind}", escape(reference))
    table.add_row("Notes", escape(asset.notes or "-"))
    table.add_row("Created", asset.created_at.isoformat())
    table.add_row("Updated", asset.updated_at.isoformat())
    console.print(table)


@app.command()
def add(
    name: Annotated[str, typer.Option("--name", "-n", help="Asset name")],
    vendor: Annotated[str, typer.Option("--vendor", help="Vendor")],
    model: Annotated[str, typer.Option("--model", "-m", help="Model")],
    serial_number: Annotated[str, typer.Option("--serial", help="Serial number")],
    purchase_date: Annotated[str, typer.Option("--purchase-date", help="YYYY-MM-DD")],
    warranty_expiry: Annotated[str, typer.Option("--warranty-expiry", help="YYYY-MM-DD")],
    end_of_life: Annotated[str, typer.Option("--end-of-life", help="YYYY-MM-DD")],
    category: Annotated[str, typer.Option("--category", help="Hardware category")] = "other",
    unit_cost: Annotated[
        float | None, typer.Option("--unit-cost", help="Cost per unit")
    ] = None,
    maintenance_provider: Annotated[
        str | None, typer.Option("--maintenance-provider", help="Maintenance contract provider")
    ] = None,
    maintenance_expiry: Annotated[
        str | None, typer.Option("--maintenance-expiry", help="Maintenance expiry (YYYY-MM-DD)")
    ] = None,
    support_provider: Annotated[
        str | None, typer.Option("--support-provider", help="Professional support provider")
    ] = None,
    support_contact: Annotated[
        str | None, typer.Option("--support-contact", help="Support contact info")
    ] = None,
    notes: Annotated[str | None, typer.Option("--notes", help="Free-form notes")] = None,
    config: ConfigOption = None,
    json_output: JsonOption = False,
) -> None:
    """Record a new hardware asset."""
    store, settings = _open_store(config)
    _check_category(category, settings)
    if settings.require_unit_cost and unit_cost is None:
        raise _fail("--unit-cost is required by the current settings")

    try:
        data = AssetInput(
            name=name,
            vendor=vendor,
            model=model,
            serial_number=serial_number,
            category=category,
            unit_cost=unit_cost,
            purchase_date=purchase_date,
            warranty_expiry=warranty_expiry,
            end_of_life=end_of_life,
            maintenance_contract=MaintenanceContract(
                has_contract=bool(maintenance_provider or maintenance_expiry),
                provider=maintenance_provider,
                expiry_date=maintenance_expiry,
            ),
            professional_support=ProfessionalSupport(
                has_support=bool(support_provider or support_contact),
                provider=support_provider,
                contact_info=support_contact,
            ),
            notes=notes,
        )
        asset = store.create(data)
    except ValidationError as e:
        raise _fail(f"Invalid asset: {e}")
    except InventoryError as e:
        raise _fail(str(e))

    if json_output:
        print(json.dumps(_dump(asset), indent=2))
        return
    console.print(f"[green]Added[/green] {escape(asset.name)} ({asset.id}) - {_status_markup(asset.status)}")


@app.command()
def update(
    asset_id: Annotated[str, typer.Argument(help="Asset ID")],
    name: Annotated[str | None, typer.Option("--name", "-n")] = None,
    vendor: Annotated[str | None, typer.Option("--vendor")] = None,
    model: Annotated[str | None, typer.Option("--model", "-m")] = None,
    serial_number: Annotated[str | None, typer.Option("--serial")] = None,
    category: Annotated[str | None, typer.Option("--category")] = None,
    unit_cost: Annotated[float | None, typer.Option("--unit-cost")] = None,
    purchase_date: Annotated[str | None, typer.Option("--purchase-date")] = None,
    warranty_expiry: Annotated[str | None, typer.Option("--warranty-expiry")] = None,
    end_of_life: Annotated[str | None, typer.Option("--end-of-life")] = None,
    maintenance_provider: Annotated[str | None, typer.Option("--maintenance-provider")] = None,
    maintenance_expiry: Annotated[str | None, typer.Option("--maintenance-expiry")] = None,
    clear_maintenance: Annotated[
        bool, typer.Option("--clear-maintenance", help="Remove the maintenance contract")
    ] = False,
    support_provider: Annotated[str | None, typer.Option("--support-provider")] = None,
    support_contact: Annotated[str | None, typer.Option("--support-contact")] = None,
    clear_support: Annotated[
        bool, typer.Option("--clear-support", help="Remove professional support")
    ] = False,
    notes: Annotated[str | None, typer.Option("--notes")] = None,
    config: ConfigOption = None,
    json_output: JsonOption = False,
) -> None:
    """Change fields of an existing asset."""
    store, settings = _open_store(config)
    _check_category(category, settings)

    try:
        current = store.get(asset_id)
    except InventoryError as e:
        raise _fail(str(e))

    changes: dict[str, object] = {
        key: value
        for key, value in {
            "name": name,
            "vendor": vendor,
            "model": model,
            "serial_number": serial_number,
            "category": category,
            "unit_cost": unit_cost,
            "purchase_date": purchase_date,
            "warranty_expiry": warranty_expiry,
            "end_of_life": end_of_life,
            "notes": notes,
        }.items()
        if value is not None
    }

    if clear_maintenance:
        changes["maintenance_contract"] = MaintenanceContract()
    elif maintenance_provider is not None or maintenance_expiry is not None:
        contract = current.maintenance_contract
        changes["maintenance_contract"] = {
            "has_contract": True,
            "provider": maintenance_provider or contract.provider,
            "expiry_date": maintenance_expiry or contract.expiry_date,
        }

    if clear_support:
        changes["professional_support"] = ProfessionalSupport()
    elif support_provider is not None or support_contact is not None:
        support = current.professional_support
        changes["professional_support"] = {
            "has_support": True,
            "provider": support_provider or support.provider,
            "contact_info": support_contact or support.contact_info,
        }

    if not changes:
        raise _fail("Nothing to update")

    try:
        asset = store.update(asset_id, AssetUpdate.model_validate(changes))
    except ValidationError as e:
        raise _fail(f"Invalid update: {e}")
    except InventoryError as e:
        raise _fail(str(e))

    if json_output:
        print(json.dumps(_dump(asset), indent=2))
        return
    console.print(f"[green]Updated[/green] {escape(asset.name)} ({asset.id}) - {_status_markup(asset.status)}")


@app.command()
def delete(
    asset_id: Annotated[str, typer.Argument(help="Asset ID")],
    config: ConfigOption = None,
) -> None:
    """Delete an asset. Deleting an unknown ID does nothing."""
    store, _ = _open_store(config)
    existed = any(a.id == asset_id for a in store.assets)
    try:
        store.delete(asset_id)
    except InventoryError as e:
        raise _fail(str(e))

    if existed:
        console.print(f"[green]Deleted[/green] {escape(asset_id)}")
    else:
        console.print(f"[dim]No asset {escape(asset_id)}; nothing to delete[/dim]")


@app.command()
def stats(
    config: ConfigOption = None,
    json_output: JsonOption = False,
) -> None:
    """Show inventory health counts."""
    store, _ = _open_store(config)
    summary = store.aggregate()

    if json_output:
        print(json.dumps(summary.model_dump(by_alias=True), indent=2))
        return

    table = Table(title="Inventory Summary")
    table.add_column("Metric")
    table.add_column("Count", justify="right")
    table.add_row("Total assets", str(summary.total))
    table.add_row(_status_markup(AssetStatus.HEALTHY), str(summary.healthy))
    table.add_row(_status_markup(AssetStatus.WARNING), str(summary.warning))
    table.add_row(_status_markup(AssetStatus.CRITICAL), str(summary.critical))
    table.add_row("With maintenance contract", str(summary.with_maintenance))
    table.add_row("With professional support", str(summary.with_support))
    console.print(table)


@app.command()
def schema(
    model: Annotated[
        str, typer.Option("--model", "-m", help="Model to export: asset, input, update")
    ] = "asset",
) -> None:
    """Export JSON Schema for asset records."""
    models = {
        "asset": Asset,
        "input": AssetInput,
        "update": AssetUpdate,
    }

    if model not in models:
        console.print(f"[red]Error:[/red] Unknown model: {escape(model)}")
        console.print(f"Available models: {', '.join(models.keys())}")
        raise typer.Exit(1)

    print(json.dumps(models[model].model_json_schema(by_alias=True), indent=2))


if __name__ == "__main__":
    app()
