"""Monthly household finances: months, expenses and their CSV storage."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .csvline import read_csv_rows
from .treemap import TreeMap

MONTH_NAMES = (
    "Enero", "Febrero", "Marzo", "Abril", "Mayo", "Junio",
    "Julio", "Agosto", "Septiembre", "Octubre", "Noviembre", "Diciembre",
)

EXPENSE_CATEGORIES = (
    "Agua", "Luz", "Gas", "Alimentacion", "Vivienda",
    "Transporte", "Conectividad", "Vestuario", "Salud", "Otros Gastos",
)

PENDING = "Pendiente"
PAID = "Pagado"
RECOVERED = "Recuperado"
NOT_REGISTERED = "No Registra"
OTHER_EXPENSES = "Otros Gastos"

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


class LedgerError(Exception):
    """Raised when a finance operation cannot be carried out."""


@dataclass
class Expense:
    """One expense category within a month."""

    category: str
    amount: int = 0
    status: str = NOT_REGISTERED
    modified: bool = False


@dataclass
class Month:
    """Income, savings and expenses of one month."""

    name: str
    income: int = 0
    saved: int = 0
    total_expenses: int = 0
    modified: bool = False
    expenses: list[Expense] = field(default_factory=list)

    def expense(self, category: str) -> Expense | None:
        """Return the first expense of ``category``, or None."""
        return next((e for e in self.expenses if e.category == category), None)

    def pending_total(self) -> int:
        """Sum of the amounts of all pending expenses."""
        return sum(e.amount for e in self.expenses if e.status == PENDING)


def month_number(name: str) -> int:
    """1-based number of a month name (any letter case); 0 if unknown."""
    lowered = name.lower()
    for number, month in enumerate(MONTH_NAMES, start=1):
        if month.lower() == lowered:
            return number
    return 0


def month_lower_than(key1: str, key2: str) -> bool:
    """Whether month ``key1`` comes before month ``key2`` in the year."""
    return month_number(key1) < month_number(key2)


def finance_file_name(year: int) -> str:
    """Name of the finance file for ``year``."""
    return f"finanzas_{year}.csv"


def _to_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def copy_csv(source: str, destination: str) -> None:
    """Copy the text file ``source`` to ``destination``."""
    try:
        with open(source, encoding="utf-8", newline="") as src:
            content = src.read()
    except OSError as exc:
        raise LedgerError(f"no se pudo abrir el archivo base '{source}'") from exc
    try:
        with open(destination, "w", encoding="utf-8", newline="") as dst:
            dst.write(content)
    except OSError as exc:
        raise LedgerError(f"no se pudo crear el archivo destino '{destination}'") from exc


class Ledger:
    """All months of one year, ordered by calendar position."""

    def __init__(self) -> None:
        self._months = TreeMap(month_lower_than)

    def add_month(self, month: Month) -> bool:
        """Add ``month``; a month already present is kept. Returns whether added."""
        return self._months.insert(month.name, month)

    def get(self, name: str) -> Month:
        """Return the month called ``name``."""
        pair = self._months.search(name)
        if pair is None:
            raise LedgerError(f"el mes {name} no existe")
        return pair[1]

    def _find(self, name: str) -> Month | None:
        pair = self._months.search(name)
        return pair[1] if pair is not None else None

    def months(self) -> list[Month]:
        """All months in calendar order."""
        return [month for _, month in self._months.items()]

    def _current(self) -> tuple[int, Month] | None:
        for index in range(len(MONTH_NAMES) - 1, -1, -1):
            month = self._find(MONTH_NAMES[index])
            if month is not None and month.modified:
                return index, month
        return None

    def current_month(self) -> Month | None:
        """The latest month that has been closed, or None."""
        found = self._current()
        return found[1] if found else None

    def last_months(self, count: int) -> list[tuple[str, Month | None]]:
        """Up to ``count`` month names going back from the current month,
        each with its data or None when the month has no data."""
        found = self._current()
        if found is None:
            return []
        start, _ = found
        result: list[tuple[str, Month | None]] = []
        for index in range(start, -1, -1):
            if len(result) >= count:
                break
            name = MONTH_NAMES[index]
            result.append((name, self._find(name)))
        return result

    def _open_month(self, name: str) -> Month:
        month = self.get(name)
        if month.modified:
            raise LedgerError(f"el mes {name} ya ha sido cerrado")
        return month

    def _closed_month(self, name: str) -> Month:
        month = self.get(name)
        if not month.modified:
            raise LedgerError(f"el mes {name} no ha sido modificado")
        return month

    @staticmethod
    def _expense_at(month: Month, index: int) -> Expense:
        if not 0 <= index < len(month.expenses):
            raise LedgerError("opción inválida")
        return month.expenses[index]

    def register_income(self, name: str, amount: int) -> None:
        """Add ``amount`` to the income and savings of an open month."""
        month = self._open_month(name)
        month.income += amount
        month.saved += amount

    def set_expense(self, name: str, index: int, amount: int, paid: bool) -> bool:
        """Set the amount of the expense at ``index`` of an open month and mark
        it pending or paid. Paying needs enough savings; otherwise it stays
        pending. Returns whether it ended up paid."""
        month = self._open_month(name)
        expense = self._expense_at(month, index)
        expense.amount = amount
        if not paid or month.saved < amount:
            expense.status = PENDING
            return False
        expense.status = PAID
        month.saved -= amount
        month.total_expenses += amount
        return True

    def pay_expense(self, name: str, index: int) -> bool:
        """Pay the pending expense at ``index`` of a closed month from its
        savings. Returns False, leaving it pending, when savings fall short."""
        month = self._closed_month(name)
        expense = self._expense_at(month, index)
        if expense.status == PAID:
            raise LedgerError("el gasto ya está marcado como pagado")
        if expense.status != PENDING:
            raise LedgerError("el gasto no está pendiente")
        if month.saved < expense.amount:
            return False
        expense.status = PAID
        month.saved -= expense.amount
        month.total_expenses += expense.amount
        return True

    def close_month(self, name: str) -> None:
        """Mark a month as closed."""
        self.get(name).modified = True

    def reset_month(self, name: str) -> None:
        """Clear all figures of a closed month and reopen it."""
        month = self._closed_month(name)
        month.income = 0
        month.saved = 0
        month.total_expenses = 0
        month.modified = False
        for expense in month.expenses:
            expense.modified = False
            expense.status = NOT_REGISTERED
            expense.amount = 0

    def months_with_pending(self) -> list[Month]:
        """Closed months before the current one that have pending expenses."""
        found = self._current()
        if found is None:
            return []
        start, _ = found
        result = []
        for name in MONTH_NAMES[:start]:
            month = self._find(name)
            if month is not None and month.modified and month.pending_total() > 0:
                result.append(month)
        return result

    def recover_pending(self, source_name: str) -> int:
        """Move the pending expenses of ``source_name`` into the current
        month's other expenses. Returns the amount moved."""
        current = self.current_month()
        if current is None:
            raise LedgerError("no hay meses modificados")
        target = current.expense(OTHER_EXPENSES)
        if target is None:
            raise LedgerError(f"el mes {current.name} no tiene '{OTHER_EXPENSES}'")
        source = self.get(source_name)
        moved = 0
        for expense in source.expenses:
            if expense.status == PENDING:
                target.amount += expense.amount
                moved += expense.amount
                expense.status = RECOVERED
        return moved

    def category_percentages(self, name: str) -> list[tuple[str, int, float]]:
        """Paid expenses of a month with their share of its total spending."""
        month = self.get(name)
        if month.total_expenses == 0:
            return []
        return [
            (e.category, e.amount, e.amount / month.total_expenses * 100)
            for e in month.expenses
            if e.status.lower() == PAID.lower()
        ]


def load_ledger(path: str) -> Ledger:
    """Read a finance file into a new ledger."""
    ledger = Ledger()
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            rows = read_csv_rows(handle, ",")
            header = next(rows, None)
            if header is None:
                return ledger
            positions: dict[str, int] = {}
            first_expense = -1
            for index, title in enumerate(header):
                if title in ("Mes", "Ingreso", "Ahorrado", "Total Gastos", "Modificado"):
                    positions[title] = index
                elif first_expense == -1 and title == "Agua":
                    first_expense = index
            missing = [t for t in ("Mes", "Ingreso", "Ahorrado", "Total Gastos", "Modificado")
                       if t not in positions]
            if missing:
                raise LedgerError(f"faltan columnas: {', '.join(missing)}")
            last = max(positions.values())
            for fields in rows:
                if not fields:
                    continue
                if len(fields) <= last:
                    raise LedgerError("fila incompleta")
                month = Month(
                    name=fields[positions["Mes"]],
                    income=_to_int(fields[positions["Ingreso"]]),
                    saved=_to_int(fields[positions["Ahorrado"]]),
                    total_expenses=_to_int(fields[positions["Total Gastos"]]),
                    modified=fields[positions["Modificado"]] == "Si",
                )
                if first_expense != -1:
                    for col in range(first_expense, positions["Total Gastos"], 2):
                        if col + 1 >= len(fields):
                            break
                        month.expenses.append(
                            Expense(header[col], _to_int(fields[col]), fields[col + 1])
                        )
                ledger.add_month(month)
    except OSError as exc:
        raise LedgerError(f"no se pudo abrir el archivo '{path}'") from exc
    return ledger


def save_ledger(ledger: Ledger, path: str) -> None:
    """Write ``ledger`` to a finance file."""
    header = "Mes,Ingreso,Ahorrado"
    header += "".join(f",{category}, Estado" for category in EXPENSE_CATEGORIES)
    header += ",Total Gastos,Modificado\n"
    lines = [header]
    for month in ledger.months():
        line = f"{month.name},{month.income},{month.saved}"
        line += "".join(f",{e.amount},{e.status}" for e in month.expenses)
        line += f",{month.total_expenses},{'Si' if month.modified else 'No'}\n"
        lines.append(line)
    try:
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.writelines(lines)
    except OSError as exc:
        raise LedgerError(f"error al abrir el archivo '{path}' para guardar") from exc