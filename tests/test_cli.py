# tests/test_cli.py
from rich.console import Console

import cli
from catalog_sdk import CatalogAPIError


def _recording(monkeypatch):
    console = Console(record=True, width=160)
    monkeypatch.setattr(cli, "console", console)
    return console


def test_show_products_renders_rows(monkeypatch):
    console = _recording(monkeypatch)
    cli.show_products([{"id": "1", "name": "Laptop", "price": 1200, "category": "electronics",
                        "inStock": True, "description": "fast"}])
    out = console.export_text()
    assert "Laptop" in out
    assert "$1200.00" in out
    assert "Products Catalog" in out


def test_show_stats(monkeypatch):
    console = _recording(monkeypatch)
    cli.show_stats({"kitchen": 1, "electronics": 2})
    out = console.export_text()
    assert out.index("electronics") < out.index("kitchen")


def test_try_api_reports_api_errors(monkeypatch):
    console = _recording(monkeypatch)

    def boom():
        raise CatalogAPIError(401, "Unauthorized: Invalid or missing API key")

    assert cli.try_api(boom) is None
    assert "Unauthorized" in console.export_text()
    assert cli.status_message.startswith("Error:")


def test_try_api_returns_result(monkeypatch):
    _recording(monkeypatch)
    assert cli.try_api(lambda: {"ok": True}, success_msg="done") == {"ok": True}
    assert cli.status_message == "done"
