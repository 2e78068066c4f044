"""Interactive console menu for the household finance ledger."""

from __future__ import annotations

import argparse
import os
import re
import sys
from collections.abc import Iterator
from typing import TextIO

from .ledger import (
    MONTH_NAMES,
    OTHER_EXPENSES,
    PAID,
    PENDING,
    Ledger,
    LedgerError,
    Month,
    copy_csv,
    finance_file_name,
    load_ledger,
    month_number,
    save_ledger,
)

TEMPLATE_FILE = "plantilla.csv"
SEPARATOR = "--------------------------------------"

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")


class FinanceCli:
    """Menu-driven session reading numbers from ``stdin`` and writing to ``stdout``."""

    def __init__(self, stdin: TextIO, stdout: TextIO, workdir: str = ".") -> None:
        self._in = stdin
        self._out = stdout
        self._workdir = workdir
        self._words = self._word_stream()
        self.ledger = Ledger()
        self.loaded = False

    # -- input / output -------------------------------------------------

    def _word_stream(self) -> Iterator[str]:
        for line in self._in:
            yield from line.split()

    def _say(self, text: str = "") -> None:
        self._out.write(text + "\n")

    def _ask(self, prompt: str) -> None:
        self._out.write(prompt)
        self._out.flush()

    def _read_int(self, prompt: str | None = None) -> int:
        """Next integer from the input; words without one are skipped.

        Raises EOFError when the input is exhausted.
        """
        if prompt is not None:
            self._ask(prompt)
        for word in self._words:
            match = _INTEGER_PATTERN.match(word)
            if match:
                return int(match.group())
        raise EOFError

    def _lookup(self, name: str) -> Month | None:
        try:
            return self.ledger.get(name)
        except LedgerError:
            return None

    def _list_months(self) -> None:
        for number, name in enumerate(MONTH_NAMES, start=1):
            self._say(f"{number:2d}. {name}")

    def _path(self, file_name: str) -> str:
        return os.path.join(self._workdir, file_name)

    # -- main loop ------------------------------------------------------

    def run(self) -> int:
        """Run the main menu until the user leaves or input ends."""
        self.show_menu()
        try:
            while True:
                option = self._read_int()
                if option == 1:
                    if not self.loaded:
                        self._say("primero carga un archivo de finanzas")
                        continue
                    self._say("Registrar movimiento financiero")
                    self.register_menu()
                    self.show_menu()
                elif option == 2:
                    self._say("Ver resumen mensual")
                    self.summary_menu()
                    self.show_menu()
                elif option == 3:
                    self._say("Presupuesto mensual")
                elif option == 4:
                    self.expenses_menu()
                    self.show_menu()
                elif option == 5:
                    self._say("Historial y análisis")
                elif option == 6:
                    self._say("Excedente mensual")
                elif option == 7:
                    self._say("Mostrando porcentajes por categorías")
                    self.percentages()
                elif option == 8:
                    self.file_menu()
                    self.show_menu()
                elif option == 0:
                    self._say("Salir del programa")
                    return 0
                else:
                    self._say("Opción no válida. Intente nuevamente.")
        except EOFError:
            return 0

    def show_menu(self) -> None:
        """Print the main menu."""
        self._say("Menu de opciones:")
        self._say("1. Registrar movimiento financiero")
        self._say("2. Ver resumen mensual")
        self._say("3. Presupuesto mensual")
        self._say("4. Gastos planificados")
        self._say("5. Historial y análisis")
        self._say("6. Excedente mensual")
        self._say("7. Selecciona Meses para ver el porcentaje de Meses")
        self._say("8. Acciones archivo de finanzas")
        self._say("0. Salir")

    # -- registering ----------------------------------------------------

    def register_menu(self) -> None:
        """Submenu to register movements or reset a month."""
        while True:
            self._say("Submenú de registro de movimientos financieros:")
            self._say("1. Registrar movimiento financiero")
            self._say("2. Reiniciar mes")
            self._say("0. Volver al menú principal")
            option = self._read_int("Seleccione una opción: ")
            if option == 1:
                self._register_movement()
            elif option == 2:
                self._reset_month()
            elif option == 0:
                self._say("Volviendo al menú principal...")
                return
            else:
                self._say("Opción no válida. Intente nuevamente.")

    def _register_movement(self) -> None:
        self._say("Seleccione el mes para registrar:")
        self._say("NOTA: Una vez modificado, el mes se marcará como cerrado.")
        self._say("ADVERTENCIA: Si el mes ya ha sido cerrado, no se podrá modificar.")
        self._say("Si desea modificar el mes deberá eliminarlo y registrarlo nuevamente.")
        self._list_months()
        choice = 0
        while not 1 <= choice <= 12:
            choice = self._read_int("Ingrese el número del mes (1-12): ")
        name = MONTH_NAMES[choice - 1]
        month = self._lookup(name)
        if month is None:
            self._say("El mes seleccionado no existe.")
            return
        if month.modified:
            self._say(
                f"El mes {name} ya ha sido cerrado. Si desea modificar el mes "
                "deberá eliminarlo y registrarlo nuevamente."
            )
            return

        while True:
            amount = self._read_int(f"Ingrese el monto de ingresos para el mes {name}: ")
            confirm = self._read_int(
                f"Confirma el ingreso de {amount} para el mes {name}? (1=Sí, 0=No): "
            )
            if confirm == 1:
                self.ledger.register_income(name, amount)
                self._say(f"Ingreso de {amount} registrado para el mes {name}.")
                break
            self._say("Ingreso no confirmado.")

        self._say("Categorías actuales:")
        for number, expense in enumerate(month.expenses, start=1):
            self._say(
                f"{number:2d}. {expense.category} | Monto: {expense.amount} "
                f"| Estado: {expense.status}"
            )

        while True:
            option = self._read_int("Seleccione una categoría para modificar (0 para salir): ")
            if option == 0:
                break
            if not 1 <= option <= len(month.expenses):
                self._say("Opción inválida. Intente nuevamente.")
                continue
            expense = month.expenses[option - 1]
            if expense.modified:
                self._say("El gasto ya ha sido modificado. No se puede cambiar.")
                continue
            while True:
                amount = self._read_int(
                    f"Ingrese el nuevo monto para la categoría {expense.category}: "
                )
                confirm = self._read_int(
                    f"Confirma el cambio de monto a {amount} para la categoría "
                    f"{expense.category}? (1=Sí, 0=No): "
                )
                if confirm == 1:
                    break
            self._say("Seleccione el estado del gasto:")
            self._say("1. Pendiente")
            self._say("2. Pagado")
            state = 0
            while not 1 <= state <= 2:
                state = self._read_int("Ingrese su opción: ")
            paid = self.ledger.set_expense(name, option - 1, amount, state == 2)
            if state == 2:
                if paid:
                    self._say("Gasto marcado como pagado")
                else:
                    self._say("No hay suficiente dinero para pagar este gasto.")
                    self._say("El gasto se ha dejado como pendiente.")

        self.ledger.close_month(name)
        self._say(f"¡Movimiento financiero actualizado para {name}!\nEl mes ha sido cerrado")

    def _choose_closed_month(self, title: str) -> Month | None:
        while True:
            self._say("Ingrese 0 para volver al menú principal.")
            self._say(title)
            self._list_months()
            choice = self._read_int("Ingrese el número del mes (1-12): ")
            if choice == 0:
                self._say("Volviendo al menú principal...")
                return None
            if not 1 <= choice <= 12:
                self._say("Opción inválida. Intente nuevamente.")
                continue
            month = self._lookup(MONTH_NAMES[choice - 1])
            if month is None:
                self._say("El mes seleccionado no existe. Intente nuevamente.")
                continue
            if not month.modified:
                self._say("El mes seleccionado no ha sido modificado. Seleccione otro mes.")
                continue
            return month

    def _reset_month(self) -> None:
        month = self._choose_closed_month("Seleccione el mes a reiniciar:")
        if month is None:
            return
        self.ledger.reset_month(month.name)
        self._say(f"El mes {month.name} ha sido reiniciado exitosamente.")

    # -- summaries ------------------------------------------------------

    def summary_menu(self) -> None:
        """Submenu with the month summaries."""
        while True:
            self._say("Submenú de movimientos financieros:")
            self._say("1. Mostrar ultimos X meses")
            self._say("2. Mostrar mes actual")
            self._say("0. Volver al menú principal")
            option = self._read_int("Seleccione una opción: ")
            if option == 1:
                self._show_last_months()
            elif option == 2:
                self._show_current_month()
            elif option == 0:
                self._say("Volviendo al menú principal...")
                return
            else:
                self._say("Opción no válida. Intente nuevamente.")

    def _print_registered_expenses(self, month: Month) -> None:
        self._say("Categorías registradas:")
        shown = False
        for expense in month.expenses:
            if expense.status in (PENDING, PAID):
                self._say(
                    f" - {expense.category} | Monto: {expense.amount} | Estado: {expense.status}"
                )
                shown = True
        if not shown:
            self._say("No hay gastos registrados para este mes.")

    def _show_last_months(self) -> None:
        count = self._read_int("¿Cuántos meses desea ver a partir del mes actual? ")
        current = self.ledger.current_month()
        if current is None:
            self._say("No hay meses modificados para mostrar.")
            return
        start = MONTH_NAMES[month_number(current.name) - 1]
        self._say(f"\n--- Mostrando los últimos {count} meses desde {start} ---")
        for name, month in self.ledger.last_months(count):
            if month is None:
                self._say(f"[{name}] No hay datos registrados para este mes.")
                continue
            if not month.modified:
                self._say(f"[{name}] El mes no ha sido modificado.")
                continue
            self._say(f"\nMes: {month.name}")
            self._say(f"Ingresos: {month.income}")
            self._say(f"Ahorro: {month.saved}")
            self._say(f"Total Gastos: {month.total_expenses}")
            self._print_registered_expenses(month)
            self._say(SEPARATOR)

    def _show_current_month(self) -> None:
        current = self.ledger.current_month()
        if current is None:
            self._say("No hay meses modificados para mostrar.")
            return
        self._say(f"\n--- Información del mes actual: {current.name} ---")
        self._print_registered_expenses(current)
        self._say(f"Total gastado: {current.total_expenses}")
        self._say(f"Monto ahorrado: {current.saved}")
        self._say(SEPARATOR)

    # -- expenses -------------------------------------------------------

    def expenses_menu(self) -> None:
        """Pay pending expenses or carry them into the current month."""
        self._say("¿Qué acción deseas realizar?")
        self._say("1. Marcar gasto como pagado")
        self._say("2. Recuperar gastos pendientes")
        self._say("0. Volver al menú principal")
        option = self._read_int("Ingrese su opcion: ")
        if option == 1:
            self._mark_paid()
        elif option == 2:
            self._recover_pending()
        elif option == 0:
            self._say("Volviendo al menú principal...")
        else:
            self._say("Opción inválida. Volviendo al menú principal...")

    def _mark_paid(self) -> None:
        month = self._choose_closed_month("Seleccione el mes para marcar gasto como pagado:")
        if month is None:
            return
        self._say("Gastos pendientes:")
        pending = [i for i, e in enumerate(month.expenses) if e.status == PENDING]
        for number, index in enumerate(pending, start=1):
            expense = month.expenses[index]
            self._say(
                f"{number:2d}. {expense.category} | Monto: {expense.amount} "
                f"| Estado: {expense.status}"
            )
        if not pending:
            self._say("No hay gastos pendientes para el mes seleccionado.")
            return
        while True:
            option = self._read_int(
                "Seleccione el gasto pendiente a marcar como pagado (0 para salir): "
            )
            if option == 0:
                return
            if not 1 <= option <= len(pending):
                self._say("Opción inválida. Intente nuevamente.")
                continue
            expense = month.expenses[pending[option - 1]]
            if expense.status == PAID:
                self._say("El gasto ya está marcado como pagado.")
                continue
            try:
                paid = self.ledger.pay_expense(month.name, pending[option - 1])
            except LedgerError:
                self._say("El gasto no está pendiente.")
                continue
            if not paid:
                self._say("No hay suficiente dinero para pagar este gasto.")
                self._say("El gasto se ha dejado como pendiente.")
                continue
            self._say(f"Gasto marcado como pagado: {expense.category} | Monto: {expense.amount}")

    def _recover_pending(self) -> None:
        current = self.ledger.current_month()
        if current is None:
            self._say("No hay meses modificados para recuperar gastos pendientes.")
            return
        self._say(
            f"Se usarán 'Otros Gastos' del mes {current.name} como destino de recuperacion."
        )
        target = current.expense(OTHER_EXPENSES)
        if target is None:
            self._say(f"El mes {current.name} no tiene '{OTHER_EXPENSES}'.")
            return
        for name in MONTH_NAMES[: month_number(current.name) - 1]:
            month = self._lookup(name)
            if month is None:
                continue
            if not month.modified:
                self._say(
                    f"El mes {month.name} no ha sido modificado, "
                    "no se recuperarán gastos pendientes."
                )
                continue
            total = month.pending_total()
            if total == 0:
                continue
            self._say(f"\nEl mes {month.name} tiene {total} en gastos pendientes.")
            answer = self._read_int(
                f"¿Deseas Trasladarlos al mes actual ({current.name}) como "
                "'Otros Gastos'? (1=Sí, 0=No): "
            )
            if answer == 0:
                self._say(f"No se trasladarán los gastos pendientes del mes {month.name}.")
                continue
            self.ledger.recover_pending(month.name)
            self._say(
                f"Gastos pendientes del mes {month.name} trasladados a 'Otros Gastos' "
                f"del mes {current.name}."
            )
        self._say(
            "\nRecuperación de gastos pendientes completada. "
            f"Total final en 'Otros Gastos' : {target.amount}"
        )

    # -- percentages ----------------------------------------------------

    def percentages(self) -> None:
        """Show each paid category's share of spending for chosen months."""
        self._say("Seleccione los meses para mostrar porcentajes por categorías (0 para terminar):")
        self._list_months()
        selected: list[int] = []
        while True:
            option = self._read_int("Ingrese el número del mes (1-12) o 0 para terminar: ")
            if option == 0:
                break
            if not 1 <= option <= 12:
                self._say("Opción inválida. Intente nuevamente.")
                continue
            name = MONTH_NAMES[option - 1]
            if option in selected:
                self._say(f"El mes {name} ya ha sido seleccionado.")
            else:
                selected.append(option)
                self._say(f"Mes {name} seleccionado.")
        if not selected:
            self._say("No se han seleccionado meses. Saliendo...")
            return

        self._say("\n--- Porcentajes por Categorías ---")
        for option in selected:
            name = MONTH_NAMES[option - 1]
            month = self._lookup(name)
            if month is None:
                self._say(f"El mes {name} no tiene datos registrados.")
                continue
            if month.total_expenses == 0:
                self._say(f"\n[{month.name}] No hay gastos registrados.")
                continue
            self._say(f"\nResumen para {month.name}:")
            self._say(f"Total Gastos: {month.total_expenses}")
            self._say("=========================")
            for category, amount, share in self.ledger.category_percentages(name):
                self._say(
                    f"Categoría: {category:<15} | Monto: {amount:6d} | Porcentaje: {share:.2f}%"
                )

    # -- files ----------------------------------------------------------

    def _ask_year_file(self, prompt: str) -> tuple[str, bool]:
        year = self._read_int(prompt)
        name = finance_file_name(year)
        return name, os.path.isfile(self._path(name))

    def file_menu(self) -> None:
        """Load, create or save the yearly finance file."""
        self._say("¿Qué acción deseas realizar?")
        self._say("1. Cargar archivo de finanzas")
        self._say("2. Crear nuevo CSV de finanzas")
        self._say("3. Guardar archivo de finanzas")
        self._say("0. Volver al menú principal")
        option = self._read_int("Ingrese su opción: ")
        if option == 1:
            if self.loaded:
                self._say("Ya se ha cargado un archivo de finanzas.")
                return
            name, exists = self._ask_year_file("Ingrese el año del archivo a cargar: ")
            if not exists:
                self._say("No se pudo verificar el archivo. Asegúrate de que el archivo exista.")
                return
            try:
                self.ledger = load_ledger(self._path(name))
            except LedgerError as exc:
                self._say(f"No se pudo abrir el archivo: {exc}")
                return
            self.loaded = True
            self._say("Archivo de finanzas cargado correctamente.")
        elif option == 2:
            name, exists = self._ask_year_file("Ingrese el año para crear un nuevo archivo: ")
            if exists:
                self._say("El archivo ya existe, no se sobreescribirá.")
                return
            try:
                copy_csv(self._path(TEMPLATE_FILE), self._path(name))
            except LedgerError as exc:
                self._say(f"Error: {exc}.")
                return
            self._say(f"Archivo '{name}' creado correctamente desde '{TEMPLATE_FILE}'.")
        elif option == 3:
            if not self.loaded:
                self._say(
                    "No se ha cargado ningún archivo de finanzas. "
                    "Carga un archivo antes de guardar."
                )
                return
            name, exists = self._ask_year_file("Ingrese el año del archivo a guardar: ")
            if not exists:
                self._say("No se pudo verificar el archivo. Asegúrate de que el archivo exista.")
                return
            try:
                save_ledger(self.ledger, self._path(name))
            except LedgerError as exc:
                self._say(f"Error al abrir el archivo para guardar: {exc}")
                return
            self._say(f"Datos guardados en {name}")
        elif option == 0:
            self._say("Volviendo al menú principal...")
        else:
            self._say("Opción inválida. Volviendo al menú principal...")


def main(argv: list[str] | None = None) -> int:
    """Start the interactive finance menu."""
    parser = argparse.ArgumentParser(description="Gestión de finanzas del hogar.")
    parser.add_argument(
        "--dir", default=".", help="carpeta con la plantilla y los archivos de finanzas"
    )
    args = parser.parse_args(argv)
    return FinanceCli(sys.stdin, sys.stdout, args.dir).run()


if __name__ == "__main__":
    sys.exit(main())