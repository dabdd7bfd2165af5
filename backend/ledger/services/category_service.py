from __future__ import annotations

from dataclasses import replace

from ledger.domain.category import Category, CategoryType
from ledger.domain.factory import DomainFactory
from ledger.repositories.ledger_repository import LedgerRepository


class CategoryService:
    def __init__(self, *, repo: LedgerRepository, factory: DomainFactory) -> None:
        self._repo = repo
        self._factory = factory

    def create_category(self, name: str, category_type: CategoryType) -> Category:
        category = self._factory.create_category(name, category_type)
        self._repo.create_category(category)
        return category

    def rename_category(self, category_id: str, new_name: str) -> Category:
        if not new_name or not new_name.strip():
            raise ValueError("category name cannot be empty")
        category = self._repo.get_category(category_id)
        renamed = replace(category, name=new_name.strip())
        self._repo.update_category(renamed)
        return renamed

    def delete_category(self, category_id: str) -> None:
        for op in self._repo.list_operations():
            if op.category_id == category_id:
                raise ValueError("cannot delete category with linked operations")
        self._repo.delete_category(category_id)

    def list_categories(self) -> list[Category]:
        return self._repo.list_categories()
