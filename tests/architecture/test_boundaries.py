from pytest_archon import archrule


def test_specifications_independence() -> None:
    """
    The filtering core is store-agnostic.
    It must not import the store, the request surface, or any framework.
    """
    (
        archrule("specifications_are_independent")
        .match("tabula_specifications*")
        .should_not_import("tabula_persistence_sqlalchemy*")
        .should_not_import("tabula_filtering*")
        .should_not_import("sqlalchemy*")
        .should_not_import("fastapi*")
        .check("tabula_specifications")
    )


def test_persistence_layering() -> None:
    """
    The SQLAlchemy store builds on the core but knows nothing of HTTP.
    """
    (
        archrule("persistence_layering")
        .match("tabula_persistence_sqlalchemy*")
        .should_not_import("tabula_filtering*")
        .should_not_import("fastapi*")
        .check("tabula_persistence_sqlalchemy")
    )


def test_filtering_core_is_store_agnostic() -> None:
    """
    Request parsing, pagination, and the service talk to the store through
    ports only.  Only the framework integrations wire in SQLAlchemy.
    """
    (
        archrule("filtering_uses_ports")
        .match("tabula_filtering*")
        .exclude("tabula_filtering.contrib*")
        .should_not_import("tabula_persistence_sqlalchemy*")
        .should_not_import("sqlalchemy*")
        .should_not_import("fastapi*")
        .check("tabula_filtering")
    )


def test_residual_pass_is_pure() -> None:
    """
    The residual pass runs in process over fetched rows.
    """
    (
        archrule("residual_is_pure")
        .match("tabula_specifications.residual*")
        .should_not_import("sqlalchemy*")
        .check("tabula_specifications")
    )
