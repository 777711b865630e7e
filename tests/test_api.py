# tests/test_api.py

"""
Tests for the HTTP routes.
"""

import pytest
from fastapi.testclient import TestClient

from ledgermatch.main import app


client = TestClient(app)

MAYBANK_CSV = "Date,Description,Reference,Debit,Credit,Balance\n15/01/2024,Salary,,,5000.00,\n"

TRANSACTION = {
    "transaction_date": "2024-01-15",
    "description": "Payment from Acme",
    "reference": "INV-100",
    "credit_amount": 1000,
}

INVOICE = {
    "type": "INVOICE",
    "id": "inv_1",
    "number": "INV-100",
    "date": "2024-01-16",
    "amount": 1000,
    "description": "Payment from Acme",
}


class TestHealth:

    def test_health(self):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready(self):
        assert client.get("/ready").json()["status"] == "ready"


class TestStatementRoutes:

    def test_list_formats(self):
        formats = client.get("/statements/formats").json()["formats"]

        assert "MAYBANK" in formats
        assert formats["CIMB"]["amounts"]["kind"] == "amount_with_type"

    def test_detect_format(self):
        response = client.post("/statements/detect-format", json={"csv_data": MAYBANK_CSV})

        assert response.status_code == 200
        assert response.json()["format"]["name"] == "Maybank"

    def test_detect_format_without_header(self):
        response = client.post("/statements/detect-format", json={"csv_data": ""})

        assert response.status_code == 400

    def test_import_with_format_key(self):
        response = client.post("/statements/import", json={
            "csv_data": MAYBANK_CSV,
            "bank_account_id": "acct_001",
            "format_key": "maybank",
        })

        body = response.json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["summary"]["valid_transactions"] == 1
        assert body["transactions"][0]["credit_amount"] == 5000
        assert body["import_batch_id"].startswith("IMPORT-acct_001-")

    def test_import_detects_format(self):
        response = client.post("/statements/import", json={
            "csv_data": MAYBANK_CSV,
            "bank_account_id": "acct_001",
            "import_batch_id": "batch_9",
        })

        body = response.json()
        assert body["success"] is True
        assert body["import_batch_id"] == "batch_9"

    def test_import_with_inline_format(self):
        response = client.post("/statements/import", json={
            "csv_data": "when,what,value\n2024-01-10,Refund,-42.50\n",
            "bank_account_id": "acct_001",
            "bank_format": {
                "name": "Custom",
                "date_column": "when",
                "description_column": "what",
                "amounts": {"kind": "amount", "amount_column": "value"},
            },
        })

        body = response.json()
        assert body["success"] is True
        assert body["transactions"][0]["debit_amount"] == 42.5

    def test_import_row_errors_are_data(self):
        response = client.post("/statements/import", json={
            "csv_data": "Date,Description,Debit,Credit\nbad,Broken,1.00,\n",
            "bank_account_id": "acct_001",
            "format_key": "MAYBANK",
        })

        assert response.status_code == 200
        assert response.json()["success"] is False
        assert response.json()["errors"] == ["Row 2: Invalid date format: bad"]

    def test_unknown_format_key(self):
        response = client.post("/statements/import", json={
            "csv_data": MAYBANK_CSV,
            "bank_account_id": "acct_001",
            "format_key": "nope",
        })

        assert response.status_code == 404

    def test_empty_statement_cannot_be_detected(self):
        response = client.post("/statements/import", json={
            "csv_data": "",
            "bank_account_id": "acct_001",
        })

        assert response.status_code == 400


class TestMatchRoutes:

    def test_auto_match(self):
        response = client.post("/matches/auto", json={
            "transactions": [TRANSACTION],
            "candidates": [INVOICE],
        })

        body = response.json()
        assert response.status_code == 200
        assert body["summary"]["automatic_matches"] == 1
        assert body["matches"][0]["confidence"] == 95
        assert body["matches"][0]["candidate"]["number"] == "INV-100"

    def test_auto_match_with_period_filter(self):
        stale = {**INVOICE, "id": "inv_old", "date": "2023-10-01"}

        response = client.post("/matches/auto", json={
            "transactions": [TRANSACTION],
            "candidates": [stale],
            "period_start": "2024-01-01",
            "period_end": "2024-01-31",
        })

        body = response.json()
        assert body["matches"] == []
        assert body["summary"]["unmatched"] == 1

    def test_auto_match_rejects_inverted_period(self):
        response = client.post("/matches/auto", json={
            "transactions": [TRANSACTION],
            "candidates": [INVOICE],
            "period_start": "2024-02-01",
            "period_end": "2024-01-01",
        })

        assert response.status_code == 400

    def test_auto_match_rejects_bad_config(self):
        response = client.post("/matches/auto", json={
            "transactions": [TRANSACTION],
            "candidates": [INVOICE],
            "config": {"auto_match_threshold": 150},
        })

        assert response.status_code == 422

    def test_invalid_transaction_is_422(self):
        response = client.post("/matches/auto", json={
            "transactions": [{**TRANSACTION, "credit_amount": 0}],
            "candidates": [INVOICE],
        })

        assert response.status_code == 422

    def test_validate(self):
        response = client.post("/matches/validate", json={
            "transaction": {**TRANSACTION, "credit_amount": 0, "debit_amount": 1000},
            "candidate": INVOICE,
        })

        body = response.json()
        assert body["valid"] is False
        assert body["errors"] == ["Transaction direction does not match candidate type"]

    def test_group(self):
        match = {
            "transaction_id": "TXN_1",
            "candidate": INVOICE,
            "confidence": 75,
            "amount_difference": 0,
            "date_difference": 1,
        }

        response = client.post("/matches/group", json={
            "matches": [match, {**match, "confidence": 92}],
        })

        body = response.json()
        assert [m["confidence"] for m in body["automatic"]] == [92]
        assert [m["confidence"] for m in body["suggested"]] == [75]
        assert body["low_confidence"] == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
