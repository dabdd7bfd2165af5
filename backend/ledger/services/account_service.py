from __future__ import annotations

from dataclasses import replace

from ledger.domain.account import BankAccount
from ledger.domain.factory import DomainFactory
from ledger.repositories.ledger_repository import LedgerRepository


class AccountService:
    def __init__(self, *, repo: LedgerRepository, factory: DomainFactory) -> None:
        self._repo = repo
        self._factory = factory

    def create_account(self, name: str, initial_balance: float = 0.0) -> BankAccount:
        account = self._factory.create_bank_account(name, initial_balance)
        self._repo.create_account(account)
        return account

    def rename_account(self, account_id: str, new_name: str) -> BankAccount:
        account = self._repo.get_account(account_id)
        if not new_name or not new_name.strip():
            raise ValueError("account name cannot be empty")
        renamed = replace(account, name=new_name.strip())
        self._repo.update_account(renamed)
        return renamed

    def delete_account(self, account_id: str) -> None:
        for op in self._repo.list_operations():
            if op.bank_account_id == account_id:
                raise ValueError("cannot delete account with existing operations")
        self._repo.delete_account(account_id)

    def list_accounts(self) -> list[BankAccount]:
        return self._repo.list_accounts()

    def recalculate_balance(self, account_id: str) -> BankAccount:
        """
        Rebuild the balance from the account's operations only.
        The initial balance is not kept anywhere, so it is lost here.
        """
        account = self._repo.get_account(account_id)
        balance = sum(
            op.signed_amount()
            for op in self._repo.list_operations()
            if op.bank_account_id == account_id
        )
        updated = replace(account, balance=float(balance))
        self._repo.update_account(updated)
        return updated
