"""Tests for the named per-resource convenience methods."""

from __future__ import annotations

import datetime
from unittest.mock import MagicMock

import pytest
import requests

from instinct_api_client import ENDPOINTS, InstinctClient
from instinct_api_client.endpoints import EndpointDescriptor
from tests.conftest import api


@pytest.fixture
def stub_client(config) -> InstinctClient:
    """A client whose dispatch is replaced by a recording mock."""
    client = InstinctClient(config=config)
    client.dispatch = MagicMock(return_value=None)
    return client


class TestEndpointCatalogue:
    def test_every_entry_has_a_method(self) -> None:
        missing = [name for name in ENDPOINTS if not callable(getattr(InstinctClient, name, None))]
        assert missing == []

    def test_list_endpoints_default_to_100(self) -> None:
        assert ENDPOINTS["get_accounts"].default_params == {"limit": 100}
        assert ENDPOINTS["get_account"].default_params == {}

    def test_merged_params_caller_wins(self) -> None:
        assert ENDPOINTS["get_invoices"].merged_params({"limit": 5, "status": "paid"}) == {
            "limit": 5,
            "status": "paid",
        }

    def test_format_path_escapes_identifiers(self) -> None:
        descriptor = EndpointDescriptor("GET", "/accounts/{account_id}")
        assert descriptor.format_path(account_id="acc/../1") == "/accounts/acc%2F..%2F1"


class TestListMethods:
    @pytest.mark.parametrize(
        "name, path",
        [
            ("get_accounts", "/accounts"),
            ("get_appointment_types", "/appointment-types"),
            ("get_alerts", "/alerts"),
            ("get_appointments", "/appointments"),
            ("get_breeds", "/breeds"),
            ("get_dispensed_prescriptions", "/dispensed-prescriptions"),
            ("get_external_prescriptions", "/external-prescriptions"),
            ("get_invoices", "/invoices"),
            ("get_invoice_ledger_entries", "/invoice-ledger-entries"),
            ("get_locations", "/locations"),
            ("get_patients", "/patients"),
            ("get_payment_transactions", "/payments/transactions"),
            ("get_products", "/products"),
            ("get_reminder_labels", "/reminder-labels"),
            ("get_reminders", "/reminders"),
            ("get_services", "/services"),
            ("get_titles", "/titles"),
            ("get_users", "/users"),
        ],
    )
    def test_list_uses_default_limit(self, stub_client: InstinctClient, name: str, path: str) -> None:
        getattr(stub_client, name)()
        stub_client.dispatch.assert_called_once_with("GET", path, params={"limit": 100}, body=None)

    def test_caller_limit_overrides_default(self, stub_client: InstinctClient) -> None:
        stub_client.get_patients({"limit": 10, "species": "dog"})
        stub_client.dispatch.assert_called_once_with(
            "GET", "/patients", params={"limit": 10, "species": "dog"}, body=None
        )

    def test_nested_list(self, stub_client: InstinctClient) -> None:
        stub_client.get_invoice_line_items("inv_1", {"limit": 5})
        stub_client.dispatch.assert_called_once_with(
            "GET", "/invoices/inv_1/line-items", params={"limit": 5}, body=None
        )


class TestVisits:
    def test_date_string_expands_to_day_window(self, stub_client: InstinctClient) -> None:
        stub_client.get_visits("2024-12-13")
        stub_client.dispatch.assert_called_once_with(
            "GET",
            "/visits",
            params={
                "limit": 100,
                "checkedInSince": "2024-12-13T00:00:00.000000Z",
                "checkedInBefore": "2024-12-13T23:59:59.999999Z",
            },
            body=None,
        )

    def test_date_object_accepted(self, stub_client: InstinctClient) -> None:
        stub_client.get_visits(datetime.date(2025, 6, 12), {"limit": 50})
        params = stub_client.dispatch.call_args.kwargs["params"]
        assert params["checkedInSince"] == "2025-06-12T00:00:00.000000Z"
        assert params["limit"] == 50

    def test_datetime_is_reduced_to_its_day(self, stub_client: InstinctClient) -> None:
        stub_client.get_visits(datetime.datetime(2025, 6, 12, 9, 30))
        params = stub_client.dispatch.call_args.kwargs["params"]
        assert params["checkedInSince"] == "2025-06-12T00:00:00.000000Z"
        assert params["checkedInBefore"] == "2025-06-12T23:59:59.999999Z"

    def test_empty_date_is_rejected(self, stub_client: InstinctClient) -> None:
        assert stub_client.get_visits("") is None
        stub_client.dispatch.assert_not_called()

    def test_check_out_without_payload(self, stub_client: InstinctClient) -> None:
        stub_client.check_out_visit("vis_1")
        stub_client.dispatch.assert_called_once_with("POST", "/visits/vis_1/check-out", params=None, body=None)


class TestSingleResourceMethods:
    @pytest.mark.parametrize(
        "name, path",
        [
            ("get_account", "/accounts/x1"),
            ("get_appointment_type", "/appointment-types/x1"),
            ("get_alert", "/alerts/x1"),
            ("get_appointment", "/appointments/x1"),
            ("get_dispensed_prescription", "/dispensed-prescriptions/x1"),
            ("get_external_prescription", "/external-prescriptions/x1"),
            ("get_invoice", "/invoices/x1"),
            ("get_invoice_line_item", "/invoice-line-items/x1"),
            ("get_location", "/locations/x1"),
            ("get_order", "/orders/x1"),
            ("get_treatment", "/treatments/x1"),
            ("get_patient", "/patients/x1"),
            ("get_pdf_request_status", "/pdfs/x1"),
            ("get_product", "/products/x1"),
            ("get_reminder_label", "/reminder-labels/x1"),
            ("get_reminder", "/reminders/x1"),
            ("get_service", "/services/x1"),
            ("get_title", "/titles/x1"),
            ("get_user", "/users/x1"),
        ],
    )
    def test_fetch_by_id(self, stub_client: InstinctClient, name: str, path: str) -> None:
        getattr(stub_client, name)("x1")
        stub_client.dispatch.assert_called_once_with("GET", path, params=None, body=None)

    @pytest.mark.parametrize("bad_id", ["", "   ", None])
    def test_empty_id_is_rejected(self, stub_client: InstinctClient, bad_id) -> None:
        assert stub_client.get_account(bad_id) is None
        stub_client.dispatch.assert_not_called()

    def test_rejection_is_logged(self, stub_client: InstinctClient, caplog) -> None:
        with caplog.at_level("WARNING", logger="instinct_api_client.resources"):
            stub_client.get_patient("")
        assert "get_patient" in caplog.text
        assert "patient_id" in caplog.text


class TestWriteMethods:
    @pytest.mark.parametrize(
        "name, args, verb, path",
        [
            ("create_visit", (), "POST", "/visits"),
            ("update_visit", ("x1",), "PATCH", "/visits/x1"),
            ("create_account", (), "POST", "/accounts"),
            ("update_account", ("x1",), "PATCH", "/accounts/x1"),
            ("update_appointment", ("x1",), "PATCH", "/appointments/x1"),
            ("cancel_appointment", ("x1",), "POST", "/appointments/x1/cancel"),
            ("create_invoice", (), "POST", "/invoices"),
            ("create_standalone_invoice", (), "POST", "/invoices/standalone"),
            ("add_invoice_line_item", ("x1",), "POST", "/invoices/x1/line-items"),
            ("create_patient", (), "POST", "/patients"),
            ("update_patient", ("x1",), "PATCH", "/patients/x1"),
            ("transfer_patient", ("x1",), "POST", "/patients/x1/transfer"),
            ("upload_patient_file", ("x1",), "POST", "/patients/x1/files"),
            ("request_pdf", (), "POST", "/pdfs"),
        ],
    )
    def test_body_is_forwarded(self, stub_client: InstinctClient, name, args, verb, path) -> None:
        body = {"field": "value"}
        getattr(stub_client, name)(*args, body)
        stub_client.dispatch.assert_called_once_with(verb, path, params=None, body=body)

    @pytest.mark.parametrize(
        "name, args",
        [
            ("create_account", ({},)),
            ("create_patient", (None,)),
            ("update_patient", ("p1", {})),
            ("update_patient", ("", {"name": "Rex"})),
            ("add_invoice_line_item", ("inv_1", None)),
            ("request_pdf", ({},)),
        ],
    )
    def test_missing_required_input_is_rejected(self, stub_client: InstinctClient, name, args) -> None:
        assert getattr(stub_client, name)(*args) is None
        stub_client.dispatch.assert_not_called()


class TestOverHttp:
    def test_get_account_end_to_end(self, client: InstinctClient, token_route, requests_mock) -> None:
        route = requests_mock.get(api("/accounts/acc_123"), json={"id": "acc_123", "name": "Pet Clinic ABC"})

        result = client.get_account("acc_123")

        assert result is not None and result.success
        assert result.data["name"] == "Pet Clinic ABC"
        assert route.last_request.headers["Authorization"] == "Bearer abc"

    def test_empty_id_makes_no_network_call(self) -> None:
        http = MagicMock(spec=requests.Session)
        client = InstinctClient(client_id="id", client_secret="secret", session=http)

        assert client.get_account("") is None
        http.post.assert_not_called()
        http.request.assert_not_called()

    def test_create_patient_end_to_end(self, client: InstinctClient, token_route, requests_mock) -> None:
        route = requests_mock.post(api("/patients"), status_code=201, json={"id": "pat_1"})

        result = client.create_patient({"name": "Rex", "species": "dog"})

        assert result is not None
        assert result.http_status == 201 and result.success
        assert route.last_request.json() == {"name": "Rex", "species": "dog"}
