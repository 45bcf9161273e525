"""Chart of accounts as a tree of named accounts."""

import logging
from typing import Callable, Iterator, Optional, Sequence, TypeVar

from personal_finances.domain.entities import (
    Account,
    AccountInfo,
    AccountKind,
    StatementKind,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def create_root(name: str, info: AccountInfo) -> Account:
    """Create a childless root account."""
    return Account(name=name, info=info)


def is_non_empty_cell(cell: str) -> bool:
    return cell is not None and str(cell).strip() != ""


def is_non_empty_row(row: Sequence[str]) -> bool:
    return len(row) > 0 and is_non_empty_cell(row[0])


def find_in_subtree(account: Account, name: str) -> Optional[Account]:
    """Find the first strict descendant of ``account`` called ``name``.

    Children are checked before their own children are searched, so the
    result is the first match of a pre-order walk below ``account``.
    """
    for child in account.children:
        if child.name == name:
            return child
        found = find_in_subtree(child, name)
        if found is not None:
            return found
    return None


def is_subaccount(parent: Account, candidate: Account) -> bool:
    """Check whether ``candidate`` lies strictly below ``parent``.

    The check is by name, so an unrelated account that shares a name with
    one of ``parent``'s descendants also counts as a subaccount.
    """
    return find_in_subtree(parent, candidate.name) is not None


def find_path(root: Account, target: Account) -> list[Account]:
    """Return the accounts from ``root`` down to ``target``, by identity.

    Returns an empty list if ``target`` is not in the subtree.
    """
    if root is target:
        return [root]
    for child in root.children:
        path = find_path(child, target)
        if path:
            return [root] + path
    return []


def pre_order_reduce(
    account: Account, seed: T, visit: Callable[[Account, T], T]
) -> T:
    """Fold ``visit`` over the subtree, parent first, children left to right."""
    accumulated = visit(account, seed)
    for child in account.children:
        accumulated = pre_order_reduce(child, accumulated, visit)
    return accumulated


def _collect(account: Account, collected: list[Account]) -> list[Account]:
    collected.append(account)
    return collected


def pre_order_map(
    account: Account,
    seed: T,
    enter: Callable[[Account, T], T],
    leave: Callable[[Account, T], T],
) -> T:
    """Walk the subtree calling ``enter`` before and ``leave`` after children.

    The value returned by ``enter`` is handed to every child walk and then
    to ``leave``; sibling walks do not see each other's results.
    """
    entered = enter(account, seed)
    for child in account.children:
        pre_order_map(child, entered, enter, leave)
    return leave(account, entered)


def _insert_below(account: Account, path: Sequence[str]) -> None:
    current = account
    for name in path:
        child = current.find_child(name)
        if child is None:
            child = Account(name=name, info=current.info)
            current.children.append(child)
        current = child


def parse_account_info(normality: str, on_income_statement: str) -> AccountInfo:
    """Build account info from the two flag cells of an account types row."""
    kind = (
        AccountKind.NORMAL_CREDIT
        if normality == "Credit"
        else AccountKind.NORMAL_DEBIT
    )
    statement = (
        StatementKind.INCOME_STATEMENT
        if on_income_statement == "Yes"
        else StatementKind.BALANCE_SHEET
    )
    return AccountInfo(kind=kind, statement=statement)


class AccountTree:
    """Ordered list of root accounts with name lookup.

    Name lookup goes through an index built from a pre-order walk over the
    roots. The first account visited under a given name wins, which is the
    same answer a linear search would give. The index is rebuilt whenever
    the tree changes through this class.
    """

    def __init__(self, root_accounts: Optional[list[Account]] = None):
        """Initialize account tree.

        Args:
            root_accounts: Optional initial roots, kept in order
        """
        self.root_accounts: list[Account] = list(root_accounts or [])
        self._name_index: Optional[dict[str, Account]] = None

    @classmethod
    def from_tables(
        cls, account_types: Sequence[Sequence[str]], account_table: Sequence[Sequence[str]]
    ) -> "AccountTree":
        """Build a tree from the account types and account tables.

        Cells are stripped of surrounding whitespace, the same way ledger
        rows are before their account names are looked up.

        Args:
            account_types: Rows of (root name, "Credit" or other, "Yes" or other)
            account_table: Rows of account paths starting at a root name

        Returns:
            AccountTree with one root per account type row
        """
        tree = cls()
        for row in account_types:
            if not is_non_empty_row(row):
                continue
            cells = list(row) + ["", ""]
            name, normality, on_income_statement = (str(cell).strip() for cell in cells[:3])
            tree.add_root(name, parse_account_info(normality, on_income_statement))

        for row in account_table:
            if not is_non_empty_row(row):
                continue
            tree.insert_path([cell for cell in row if is_non_empty_cell(cell)])

        logger.debug(
            "account_tree_built",
            extra={
                "roots": len(tree.root_accounts),
                "accounts": sum(1 for _ in tree.iter_accounts()),
            },
        )
        return tree

    def add_root(self, name: str, info: AccountInfo) -> Account:
        """Append a new root account and return it."""
        root = create_root(name, info)
        self.root_accounts.append(root)
        self._name_index = None
        return root

    def get_root(self, name: str) -> Optional[Account]:
        """Return the root called ``name``, ignoring nested accounts."""
        for root in self.root_accounts:
            if root.name == name:
                return root
        return None

    def insert_path(self, path: Sequence[str]) -> None:
        """Insert an account path, creating missing intermediate accounts.

        The first segment must name an existing root; otherwise nothing
        happens. New accounts inherit the info of their parent.
        """
        segments = [str(segment).strip() for segment in path if is_non_empty_cell(segment)]
        if not segments:
            return
        root = self.get_root(segments[0])
        if root is None:
            logger.debug("account_path_ignored", extra={"path": list(segments)})
            return
        _insert_below(root, segments[1:])
        self._name_index = None

    def add_synthetic_account(
        self, parent: Account, name: str, info: AccountInfo
    ) -> Account:
        """Append a derived account, such as net revenue, under ``parent``."""
        account = Account(name=name, info=info)
        parent.children.append(account)
        self._name_index = None
        return account

    def iter_accounts(self) -> Iterator[Account]:
        """Yield every account, roots in order, each subtree in pre-order."""
        for root in self.root_accounts:
            yield from self.walk(root)

    def walk(self, account: Account) -> Iterator[Account]:
        """Yield ``account`` and its descendants in pre-order."""
        yield from pre_order_reduce(account, [], _collect)

    def paths(self) -> Iterator[tuple[tuple[str, ...], Account]]:
        """Yield (path of names, account) pairs in pre-order."""

        def visit(account: Account, prefix: tuple[str, ...]):
            path = prefix + (account.name,)
            yield path, account
            for child in account.children:
                yield from visit(child, path)

        for root in self.root_accounts:
            yield from visit(root, ())

    def find_by_name(self, name: str) -> Optional[Account]:
        """Find an account by name anywhere in the tree.

        Args:
            name: Account name

        Returns:
            First account in pre-order with that name, or None
        """
        if self._name_index is None:
            self._name_index = self._build_name_index()
        return self._name_index.get(name)

    def _build_name_index(self) -> dict[str, Account]:
        index: dict[str, Account] = {}
        for account in self.iter_accounts():
            index.setdefault(account.name, account)
        return index
