# finanzas-hogar

A console ledger for household finances, with menus and messages in Spanish.
Each year lives in its own CSV file, `finanzas_<year>.csv`, with one row per
month holding the income, the money saved, every expense category with its
amount and state, the total spent, and whether the month has been closed.

## Installation

```
pip install .
```

## Usage

Start the interactive menu:

```
finanzas-hogar
```

By default the finance files and the template are looked for in the current
directory; pass another one with `--dir`:

```
finanzas-hogar --dir ~/finanzas
```

The menu reads numbers from standard input. Its options:

1. Register a month's income and expenses, or reset a closed month. A month
   is closed once it has been registered and cannot be registered again until
   it is reset.
2. View a summary: the current month (the latest closed one), or a number of
   months going back from it.
4. Mark pending expenses of a closed month as paid, or move the pending
   expenses of earlier closed months into "Otros Gastos" of the current month
   (their state becomes "Recuperado").
7. Pick months and see what share of the month's total each paid category
   took.
8. Load, create or save the yearly finance file.
0. Quit.

Load a file through option 8 before registering anything. Creating a file
copies `plantilla.csv` from the working directory to `finanzas_<year>.csv`
and refuses to overwrite an existing file. Saving writes back to
`finanzas_<year>.csv`, which must already exist.

Income goes into savings; paying an expense takes its amount out of savings
and adds it to the month's total. An expense costing more than the current
savings stays pending.

## Using the library

`finanzas_hogar.ledger` holds the data model (`Ledger`, `Month`, `Expense`)
and the file functions:

```python
from finanzas_hogar.ledger import finance_file_name, load_ledger, save_ledger

ledger = load_ledger(finance_file_name(2024))
ledger.register_income("Enero", 500000)
paid = ledger.set_expense("Enero", 0, 12000, paid=True)  # False if savings fall short
ledger.close_month("Enero")
print(ledger.category_percentages("Enero"))  # [(category, amount, percent), ...]
save_ledger(ledger, finance_file_name(2024))
```

`set_expense` and `pay_expense` return `False`, leaving the expense pending,
when there is not enough saved. Operations that do not apply raise
`LedgerError`: an unknown month, changing a month that is already closed,
paying or resetting a month that is not closed, an expense index out of
range, or paying an expense that is not pending.

Two smaller modules are used underneath: `finanzas_hogar.treemap.TreeMap`,
a sorted map on an AVL tree ordered by a `lower_than` function, and
`finanzas_hogar.csvline`, which parses lines with quoted fields
(`parse_csv_line`, `read_csv_rows`).

## What it does not do

- No template ships with the package: `plantilla.csv` must be supplied by
  you to create new yearly files.
- Menu options 3 (monthly budget), 5 (history and analysis) and 6 (monthly
  surplus) only print their heading; there are no budgets or trend analyses.

## Tests

```
pip install .[test]
pytest
```