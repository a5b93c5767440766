"""Shared fixtures for building workspace templates in tests."""

import json

import pytest

from synlint.parser import parse_manifest

TYPE_PREFIX = "Microsoft.Synapse/workspaces/"


def name_expr(name: str) -> str:
    return f"[concat(parameters('workspaceName'), '/{name}')]"


def ref(kind: str, name: str) -> str:
    return f"[concat(variables('workspaceId'), '/{kind}/{name}')]"


def activity(name: str, type: str = "Copy", depends_on=None, description: str | None = "Does work",
             timeout: str | None = None, **type_properties) -> dict:
    """Raw activity; ``depends_on`` is a list of (activity, [conditions]) pairs."""
    raw = {
        "name": name,
        "type": type,
        "dependsOn": [
            {"activity": upstream, "dependencyConditions": list(conditions)}
            for upstream, conditions in (depends_on or [])
        ],
        "policy": {"timeout": timeout} if timeout else {},
        "typeProperties": type_properties,
    }
    if description is not None:
        raw["description"] = description
    return raw


class TemplateBuilder:
    """Builds raw workspace templates; resources are documented by default."""

    def __init__(self):
        self.resources = []

    def add(self, kind: str, name: str, properties: dict, depends_on=None) -> "TemplateBuilder":
        self.resources.append({
            "name": name_expr(name),
            "type": TYPE_PREFIX + kind,
            "apiVersion": "2019-06-01-preview",
            "properties": properties,
            "dependsOn": list(depends_on or []),
        })
        return self

    def pipeline(self, name, activities=None, depends_on=None, description="Loads data",
                 folder="Ingest", annotations=("team",)) -> "TemplateBuilder":
        properties = {"activities": list(activities or []), "annotations": list(annotations)}
        if description is not None:
            properties["description"] = description
        if folder is not None:
            properties["folder"] = {"name": folder}
        return self.add("pipelines", name, properties, depends_on)

    def dataset(self, name, depends_on=None, description="A dataset", folder="Raw",
                annotations=("team",)) -> "TemplateBuilder":
        properties = {"type": "Parquet", "annotations": list(annotations)}
        if description is not None:
            properties["description"] = description
        if folder is not None:
            properties["folder"] = {"name": folder}
        return self.add("datasets", name, properties, depends_on)

    def linked_service(self, name, type="AzureSqlDatabase", type_properties=None,
                       description="A linked service", annotations=(), depends_on=None) -> "TemplateBuilder":
        if type_properties is None:
            type_properties = {
                "connectionString": "Server=tcp:example;",
                "password": {
                    "type": "AzureKeyVaultSecret",
                    "store": {"referenceName": "KeyVault", "type": "LinkedServiceReference"},
                    "secretName": "sql-password",
                },
            }
        properties = {"type": type, "typeProperties": type_properties, "annotations": list(annotations)}
        if description is not None:
            properties["description"] = description
        return self.add("linkedServices", name, properties, depends_on)

    def data_flow(self, name, depends_on=None, description="A data flow") -> "TemplateBuilder":
        properties = {"type": "MappingDataFlow"}
        if description is not None:
            properties["description"] = description
        return self.add("dataflows", name, properties, depends_on)

    def trigger(self, name, pipelines=(), description="Nightly", annotations=("team",)) -> "TemplateBuilder":
        properties = {"type": "ScheduleTrigger", "annotations": list(annotations)}
        if description is not None:
            properties["description"] = description
        return self.add("triggers", name, properties, [ref("pipelines", p) for p in pipelines])

    def build(self) -> dict:
        return {
            "$schema": "http://schema.management.azure.com/schemas/2015-01-01/deploymentTemplate.json#",
            "contentVersion": "1.0.0.0",
            "resources": self.resources,
        }

    def manifest(self):
        return parse_manifest(self.build())

    def write(self, path):
        path.write_text(json.dumps(self.build(), indent=2), encoding="utf-8")
        return path


@pytest.fixture
def workspace():
    """Empty template builder."""
    return TemplateBuilder()


@pytest.fixture
def clean_workspace():
    """A fully wired, documented workspace that produces no findings."""
    return (
        TemplateBuilder()
        .linked_service("KeyVault", type="AzureKeyVault", type_properties={"baseUrl": "https://kv.vault.azure.net/"})
        .linked_service("LS_Sql", depends_on=[ref("linkedServices", "KeyVault")],
                        annotations=("team",))
        .dataset("DS_Orders", depends_on=[ref("linkedServices", "LS_Sql")])
        .pipeline("PL_Load", activities=[activity("CopyOrders", timeout="0.01:00:00")],
                  depends_on=[ref("datasets", "DS_Orders")])
        .trigger("TR_Nightly", pipelines=["PL_Load"])
    )
