import io
from unittest import mock

from finanzas_hogar import csvline
from finanzas_hogar.csvline import (
    MAX_FIELDS,
    clear_screen,
    parse_csv_line,
    read_csv_rows,
    split_string,
    wait_for_key,
)


def test_plain_fields():
    assert parse_csv_line("Mes,Ingreso,Ahorrado\n") == ["Mes", "Ingreso", "Ahorrado"]


def test_line_break_variants_removed():
    assert parse_csv_line("a,b\r\n") == ["a", "b"]
    assert parse_csv_line("a,b\rignored") == ["a", "b"]


def test_quoted_field_with_separator():
    assert parse_csv_line('a,"b,c",d') == ["a", "b,c", "d"]


def test_doubled_quotes_become_literal():
    assert parse_csv_line('"say ""hi""",x') == ['say "hi"', "x"]


def test_empty_middle_field_and_trailing_separator():
    assert parse_csv_line("a,,b,") == ["a", "", "b"]


def test_empty_line_has_no_fields():
    assert parse_csv_line("\n") == []


def test_other_separator():
    assert parse_csv_line("1;2;3", ";") == ["1", "2", "3"]


def test_field_limit():
    line = ",".join(str(i) for i in range(300))
    fields = parse_csv_line(line)
    assert len(fields) == MAX_FIELDS - 1
    assert fields[0] == "0"


def test_read_csv_rows_round_trip():
    rows = [["Mes", "Agua", " Estado"], ["Enero", "100", "Pagado"]]
    stream = io.StringIO("".join(",".join(r) + "\n" for r in rows))
    assert list(read_csv_rows(stream)) == rows


def test_split_string_trims_and_skips_empty():
    assert split_string("  uno , dos,,tres  ", ",") == ["uno", "dos", "tres"]


def test_split_string_multiple_delimiters():
    assert split_string("a;b,c", ",;") == ["a", "b", "c"]


def test_clear_screen_runs_clear(capsys):
    with mock.patch.object(csvline.subprocess, "run") as run:
        clear_screen()
    assert run.call_args == mock.call(["clear"], check=False)
    assert run.call_count == 1
    assert capsys.readouterr().out == ""


def test_clear_screen_falls_back_to_escape(capsys):
    with mock.patch.object(csvline.subprocess, "run", side_effect=FileNotFoundError):
        clear_screen()
    assert capsys.readouterr().out == "\033[2J\033[H"


def test_wait_for_key_prompts_and_reads(capsys):
    reader = mock.Mock(return_value="\n")
    wait_for_key(reader)
    assert reader.call_count == 1
    assert capsys.readouterr().out == "Presione una tecla para continuar...\n"