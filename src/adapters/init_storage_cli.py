"""CLI adapter to create the revenue and expense tables."""

from src.infrastructure.container import build_records_repository


def main() -> None:
    """Create the record tables when they are missing."""
    repository = build_records_repository()
    repository.prepare_storage()
    print("Record tables are ready.")


if __name__ == "__main__":  # pragma: no cover
    main()
