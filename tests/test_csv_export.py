"""Tests for CSV export."""
import shutil
import tempfile
import unittest
from datetime import date
from pathlib import Path

from statementlens.export.csv_export import default_export_name, format_amount, to_csv, write_csv
from statementlens.models import Transaction


class TestCsvExport(unittest.TestCase):
    """Test CSV serialization."""

    def setUp(self):
        self.transactions = [
            Transaction("2024-01-05", "Zomato Food Delivery", 450, 0, 15230),
            Transaction("2024-01-07", 'Salary, "January"', 0, 52000.5, 67230.5),
        ]

    def test_two_rows_in_column_order(self):
        lines = to_csv(self.transactions).split("\n")

        self.assertEqual(lines[0], "Date,Payment Information,Outflow,Inflow,Balance")
        self.assertEqual(len(lines), 3)
        self.assertEqual(lines[1], '2024-01-05,"Zomato Food Delivery",450,0,15230')
        self.assertEqual(lines[2], '2024-01-07,"Salary, ""January""",0,52000.5,67230.5')

    def test_readable_by_csv_module(self):
        import csv
        import io

        rows = list(csv.reader(io.StringIO(to_csv(self.transactions))))

        self.assertEqual(rows[2][1], 'Salary, "January"')
        self.assertEqual(len(rows[2]), 5)

    def test_empty_ledger_is_header_only(self):
        self.assertEqual(to_csv([]), "Date,Payment Information,Outflow,Inflow,Balance")

    def test_format_amount(self):
        self.assertEqual(format_amount(450.0), "450")
        self.assertEqual(format_amount(0.1), "0.1")
        self.assertEqual(format_amount(-12.75), "-12.75")

    def test_default_export_name(self):
        self.assertEqual(default_export_name(date(2024, 3, 9)), "Statement_Export_2024-03-09.csv")


class TestWriteCsv(unittest.TestCase):
    """Test writing exports to disk."""

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())
        self.transactions = [Transaction("2024-01-05", "Zomato", 450, 0, 15230)]

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_write_to_file(self):
        path = write_csv(self.transactions, self.test_dir / "out.csv")
        self.assertEqual(path.read_text(encoding="utf-8"), to_csv(self.transactions))

    def test_write_to_directory_uses_default_name(self):
        path = write_csv(self.transactions, self.test_dir)
        self.assertEqual(path.parent, self.test_dir)
        self.assertTrue(path.name.startswith("Statement_Export_"))
        self.assertTrue(path.exists())


if __name__ == "__main__":
    unittest.main()
