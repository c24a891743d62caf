"""Unit tests for CSV parsing of bulk import uploads."""

from provisioning.application.csv_reader import parse_csv_rows


class TestParseCsvRows:
    """Tests for parse_csv_rows."""

    def test_parses_header_and_rows(self):
        text = "email,role,first_name\na@x.com,admin,Ada\nb@x.com,learner,Bob\n"

        rows = parse_csv_rows(text)

        assert rows == [
            {"email": "a@x.com", "role": "admin", "first_name": "Ada"},
            {"email": "b@x.com", "role": "learner", "first_name": "Bob"},
        ]

    def test_empty_or_blank_text_yields_no_rows(self):
        assert parse_csv_rows(None) == []
        assert parse_csv_rows("") == []
        assert parse_csv_rows("  \n \n") == []

    def test_header_only_yields_no_rows(self):
        assert parse_csv_rows("email,role\n") == []

    def test_strips_byte_order_mark(self):
        """Spreadsheet exports often start with a UTF-8 BOM."""
        rows = parse_csv_rows("\ufeffemail\na@x.com\n")
        assert rows == [{"email": "a@x.com"}]

    def test_trims_header_names(self):
        rows = parse_csv_rows(" email , role \na@x.com,admin\n")
        assert rows == [{"email": "a@x.com", "role": "admin"}]

    def test_skips_blank_lines(self):
        rows = parse_csv_rows("email\na@x.com\n\n,\nb@x.com\n")
        assert [row["email"] for row in rows] == ["a@x.com", "b@x.com"]

    def test_quoted_fields_may_contain_commas(self):
        rows = parse_csv_rows('email,team_name\na@x.com,"Sales, EMEA"\n')
        assert rows[0]["team_name"] == "Sales, EMEA"

    def test_missing_trailing_fields_read_as_empty(self):
        rows = parse_csv_rows("email,role,team_name\na@x.com\n")
        assert rows == [{"email": "a@x.com", "role": "", "team_name": ""}]

    def test_surplus_fields_are_dropped(self):
        rows = parse_csv_rows("email\na@x.com,extra,more\n")
        assert rows == [{"email": "a@x.com"}]

    def test_accepts_crlf_line_endings(self):
        rows = parse_csv_rows("email,role\r\na@x.com,admin\r\n")
        assert rows == [{"email": "a@x.com", "role": "admin"}]
