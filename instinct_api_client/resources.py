"""
Named convenience methods for the Instinct partner API resources.

Each method shapes its arguments into a call on one entry of
:data:`~.endpoints.ENDPOINTS`.  Required identifiers and request bodies
are checked before anything is sent: an empty one is logged and the
method returns ``None`` without touching the network.

List methods accept ``params``, merged over the default
``{"limit": 100}``; pass ``{"pageCursor": ...}`` to fetch a later page.
"""

from __future__ import annotations

import logging
from datetime import date as _date
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .endpoints import ENDPOINTS
from .result import ApiResult
from .urls import merge_query

logger = logging.getLogger(__name__)

Params = Optional[Mapping[str, Any]]
Body = Optional[Any]


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (Mapping, list, tuple)):
        return len(value) == 0
    return False


class ResourceMethodsMixin:
    """Per-resource methods layered over :meth:`InstinctClient.dispatch`."""

    dispatch: Callable[..., Optional[ApiResult]]

    def _call_endpoint(
        self,
        name: str,
        *,
        path_params: Optional[Dict[str, Any]] = None,
        params: Params = None,
        body: Body = None,
        body_required: bool = False,
    ) -> Optional[ApiResult]:
        endpoint = ENDPOINTS[name]
        path_params = path_params or {}
        missing = [key for key, value in path_params.items() if _is_empty(value)]
        if body_required and _is_empty(body):
            missing.append("data")
        if missing:
            logger.warning("%s() called without required %s; request not sent", name, ", ".join(missing))
            return None
        query = endpoint.merged_params(params)
        return self.dispatch(
            endpoint.method,
            endpoint.format_path(**path_params),
            params=query or None,
            body=body,
        )

    # ------------------------------------------------------------------
    # Visits
    # ------------------------------------------------------------------
    def get_visits(self, date: Union[str, _date], params: Params = None) -> Optional[ApiResult]:
        """List visits checked in on ``date``.

        Parameters
        ----------
        date : str or datetime.date
            The day to list, as a ``date`` or a ``YYYY-MM-DD`` string.
            A ``datetime`` is reduced to its calendar day.
            It is expanded to the ``checkedInSince``/``checkedInBefore``
            window covering that whole day in UTC.
        params : dict, optional
            Extra query parameters; these override the computed window
            and the default page size.
        """
        if isinstance(date, _date):
            date = date.strftime("%Y-%m-%d")
        if _is_empty(date):
            logger.warning("get_visits() called without a date; request not sent")
            return None
        window = {
            "checkedInSince": f"{date}T00:00:00.000000Z",
            "checkedInBefore": f"{date}T23:59:59.999999Z",
        }
        return self._call_endpoint("get_visits", params=merge_query(window, params))

    def create_visit(self, data: Body) -> Optional[ApiResult]:
        return self._call_endpoint("create_visit", body=data, body_required=True)

    def update_visit(self, visit_id: str, data: Body) -> Optional[ApiResult]:
        """Partially update a visit; only the supplied fields change."""
        return self._call_endpoint(
            "update_visit", path_params={"visit_id": visit_id}, body=data, body_required=True
        )

    def check_out_visit(self, visit_id: str, data: Body = None) -> Optional[ApiResult]:
        return self._call_endpoint("check_out_visit", path_params={"visit_id": visit_id}, body=data)

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------
    def get_accounts(self, params: Params = None) -> Optional[ApiResult]:
        """List accounts, one page at a time."""
        return self._call_endpoint("get_accounts", params=params)

    def get_account(self, account_id: str) -> Optional[ApiResult]:
        return self._call_endpoint("get_account", path_params={"account_id": account_id})

    def create_account(self, data: Body) -> Optional[ApiResult]:
        return self._call_endpoint("create_account", body=data, body_required=True)

    def update_account(self, account_id: str, data: Body) -> Optional[ApiResult]:
        """Partially update an account; only the supplied fields change."""
        return self._call_endpoint(
            "update_account", path_params={"account_id": account_id}, body=data, body_required=True
        )

    # ------------------------------------------------------------------
    # Appointment types
    # ------------------------------------------------------------------
    def get_appointment_types(self, params: Params = None) -> Optional[ApiResult]:
        return self._call_endpoint("get_appointment_types", params=params)

    def get_appointment_type(self, appointment_type_id: str) -> Optional[ApiResult]:
        return self._call_endpoint(
            "get_appointment_type", path_params={"appointment_type_id": appointment_type_id}
        )

    # ------------------------------------------------------------------
    # Alerts
    # ------------------------------------------------------------------
    def get_alerts(self, params: Params = None) -> Optional[ApiResult]:
        return self._call_endpoint("get_alerts", params=params)

    def get_alert(self, alert_id: str) -> Optional[ApiResult]:
        return self._call_endpoint("get_alert", path_params={"alert_id": alert_id})

    # ------------------------------------------------------------------
    # Appointments
    # ------------------------------------------------------------------
    def get_appointments(self, params: Params = None) -> Optional[ApiResult]:
        return self._call_endpoint("get_appointments", params=params)

    def get_appointment(self, appointment_id: str) -> Optional[ApiResult]:
        return self._call_endpoint("get_appointment", path_params={"appointment_id": appointment_id})

    def update_appointment(self, appointment_id: str, data: Body) -> Optional[ApiResult]:
        return self._call_endpoint(
            "update_appointment",
            path_params={"appointment_id": appointment_id},
            body=data,
            body_required=True,
        )

    def cancel_appointment(self, appointment_id: str, data: Body = None) -> Optional[ApiResult]:
        """Cancel an appointment, optionally with a reason payload."""
        return self._call_endpoint(
            "cancel_appointment", path_params={"appointment_id": appointment_id}, body=data
        )

    # ------------------------------------------------------------------
    # Breeds
    # ------------------------------------------------------------------
    def get_breeds(self, params: Params = None) -> Optional[ApiResult]:
        return self._call_endpoint("get_breeds", params=params)

    # ------------------------------------------------------------------
    # Prescriptions
    # ------------------------------------------------------------------
    def get_dispensed_prescriptions(self, params: Params = None) -> Optional[ApiResult]:
        return self._call_endpoint("get_dispensed_prescriptions", params=params)

    def get_dispensed_prescription(self, prescription_id: str) -> Optional[ApiResult]:
        return self._call_endpoint(
            "get_dispensed_prescription", path_params={"prescription_id": prescription_id}
        )

    def get_external_prescriptions(self, params: Params = None) -> Optional[ApiResult]:
        """List prescriptions written outside the practice."""
        return self._call_endpoint("get_external_prescriptions", params=params)

    def get_external_prescription(self, prescription_id: str) -> Optional[ApiResult]:
        return self._call_endpoint(
            "get_external_prescription", path_params={"prescription_id": prescription_id}
        )

    # ------------------------------------------------------------------
    # Invoices
    # ------------------------------------------------------------------
    def get_invoices(self, params: Params = None) -> Optional[ApiResult]:
        return self._call_endpoint("get_invoices", params=params)

    def get_invoice(self, invoice_id: str) -> Optional[ApiResult]:
        return self._call_endpoint("get_invoice", path_params={"invoice_id": invoice_id})

    def create_invoice(self, data: Body) -> Optional[ApiResult]:
        """Create an invoice attached to a visit."""
        return self._call_endpoint("create_invoice", body=data, body_required=True)

    def create_standalone_invoice(self, data: Body) -> Optional[ApiResult]:
        """Create an invoice that is not attached to any visit."""
        return self._call_endpoint("create_standalone_invoice", body=data, body_required=True)

    def get_invoice_ledger_entries(self, params: Params = None) -> Optional[ApiResult]:
        return self._call_endpoint("get_invoice_ledger_entries", params=params)

    def get_invoice_line_items(self, invoice_id: str, params: Params = None) -> Optional[ApiResult]:
        return self._call_endpoint(
            "get_invoice_line_items", path_params={"invoice_id": invoice_id}, params=params
        )

    def get_invoice_line_item(self, line_item_id: str) -> Optional[ApiResult]:
        return self._call_endpoint("get_invoice_line_item", path_params={"line_item_id": line_item_id})

    def add_invoice_line_item(self, invoice_id: str, data: Body) -> Optional[ApiResult]:
        return self._call_endpoint(
            "add_invoice_line_item", path_params={"invoice_id": invoice_id}, body=data, body_required=True
        )

    # ------------------------------------------------------------------
    # Locations
    # ------------------------------------------------------------------
    def get_locations(self, params: Params = None) -> Optional[ApiResult]:
        return self._call_endpoint("get_locations", params=params)

    def get_location(self, location_id: str) -> Optional[ApiResult]:
        return self._call_endpoint("get_location", path_params={"location_id": location_id})

    # ------------------------------------------------------------------
    # Orders and treatments
    # ------------------------------------------------------------------
    def get_order(self, order_id: str) -> Optional[ApiResult]:
        return self._call_endpoint("get_order", path_params={"order_id": order_id})

    def get_orders_by_visit(self, visit_id: str, params: Params = None) -> Optional[ApiResult]:
        """List the orders placed during a visit."""
        return self._call_endpoint("get_orders_by_visit", path_params={"visit_id": visit_id}, params=params)

    def get_treatments_by_order(self, order_id: str, params: Params = None) -> Optional[ApiResult]:
        return self._call_endpoint(
            "get_treatments_by_order", path_params={"order_id": order_id}, params=params
        )

    def get_treatment(self, treatment_id: str) -> Optional[ApiResult]:
        return self._call_endpoint("get_treatment", path_params={"treatment_id": treatment_id})

    # ------------------------------------------------------------------
    # Patients
    # ------------------------------------------------------------------
    def get_patients(self, params: Params = None) -> Optional[ApiResult]:
        return self._call_endpoint("get_patients", params=params)

    def get_patient(self, patient_id: str) -> Optional[ApiResult]:
        return self._call_endpoint("get_patient", path_params={"patient_id": patient_id})

    def create_patient(self, data: Body) -> Optional[ApiResult]:
        return self._call_endpoint("create_patient", body=data, body_required=True)

    def update_patient(self, patient_id: str, data: Body) -> Optional[ApiResult]:
        return self._call_endpoint(
            "update_patient", path_params={"patient_id": patient_id}, body=data, body_required=True
        )

    def transfer_patient(self, patient_id: str, data: Body) -> Optional[ApiResult]:
        """Move a patient to another account."""
        return self._call_endpoint(
            "transfer_patient", path_params={"patient_id": patient_id}, body=data, body_required=True
        )

    def upload_patient_file(self, patient_id: str, data: Body) -> Optional[ApiResult]:
        """Attach a file to a patient record.

        ``data`` is sent as JSON, so file content must already be
        encoded the way the API expects (for example base64).
        """
        return self._call_endpoint(
            "upload_patient_file", path_params={"patient_id": patient_id}, body=data, body_required=True
        )

    # ------------------------------------------------------------------
    # Payments
    # ------------------------------------------------------------------
    def get_payment_transactions(self, params: Params = None) -> Optional[ApiResult]:
        return self._call_endpoint("get_payment_transactions", params=params)

    # ------------------------------------------------------------------
    # PDFs
    # ------------------------------------------------------------------
    def request_pdf(self, data: Body) -> Optional[ApiResult]:
        """Queue generation of a PDF document.

        Poll :meth:`get_pdf_request_status` with the returned request id
        until the document is ready.
        """
        return self._call_endpoint("request_pdf", body=data, body_required=True)

    def get_pdf_request_status(self, request_id: str) -> Optional[ApiResult]:
        return self._call_endpoint("get_pdf_request_status", path_params={"request_id": request_id})

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------
    def get_products(self, params: Params = None) -> Optional[ApiResult]:
        return self._call_endpoint("get_products", params=params)

    def get_product(self, product_id: str) -> Optional[ApiResult]:
        return self._call_endpoint("get_product", path_params={"product_id": product_id})

    # ------------------------------------------------------------------
    # Reminders
    # ------------------------------------------------------------------
    def get_reminder_labels(self, params: Params = None) -> Optional[ApiResult]:
        return self._call_endpoint("get_reminder_labels", params=params)

    def get_reminder_label(self, label_id: str) -> Optional[ApiResult]:
        return self._call_endpoint("get_reminder_label", path_params={"label_id": label_id})

    def get_reminders(self, params: Params = None) -> Optional[ApiResult]:
        return self._call_endpoint("get_reminders", params=params)

    def get_reminder(self, reminder_id: str) -> Optional[ApiResult]:
        return self._call_endpoint("get_reminder", path_params={"reminder_id": reminder_id})

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------
    def get_services(self, params: Params = None) -> Optional[ApiResult]:
        return self._call_endpoint("get_services", params=params)

    def get_service(self, service_id: str) -> Optional[ApiResult]:
        return self._call_endpoint("get_service", path_params={"service_id": service_id})

    # ------------------------------------------------------------------
    # Users and titles
    # ------------------------------------------------------------------
    def get_titles(self, params: Params = None) -> Optional[ApiResult]:
        return self._call_endpoint("get_titles", params=params)

    def get_title(self, title_id: str) -> Optional[ApiResult]:
        return self._call_endpoint("get_title", path_params={"title_id": title_id})

    def get_users(self, params: Params = None) -> Optional[ApiResult]:
        return self._call_endpoint("get_users", params=params)

    def get_user(self, user_id: str) -> Optional[ApiResult]:
        return self._call_endpoint("get_user", path_params={"user_id": user_id})
