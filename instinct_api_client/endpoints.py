"""
Static catalogue of the Instinct partner API resources.

Each named convenience method on :class:`~.client.InstinctClient` is
described here by an :class:`EndpointDescriptor`: the HTTP verb, a path
template with ``{placeholders}`` for identifiers, and the default query
parameters merged beneath the caller's own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .urls import merge_query, quote_segment

DEFAULT_PAGE_SIZE = 100
LIST_DEFAULTS: Mapping[str, Any] = MappingProxyType({"limit": DEFAULT_PAGE_SIZE})


@dataclass(frozen=True)
class EndpointDescriptor:
    method: str
    path: str
    default_params: Mapping[str, Any] = field(default_factory=dict)

    def format_path(self, **path_params: Any) -> str:
        """Substitute percent-encoded identifiers into the path template."""
        return self.path.format(**{k: quote_segment(v) for k, v in path_params.items()})

    def merged_params(self, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return merge_query(self.default_params, overrides)


def _list(path: str) -> EndpointDescriptor:
    return EndpointDescriptor("GET", path, LIST_DEFAULTS)


def _get(path: str) -> EndpointDescriptor:
    return EndpointDescriptor("GET", path)


def _post(path: str) -> EndpointDescriptor:
    return EndpointDescriptor("POST", path)


def _patch(path: str) -> EndpointDescriptor:
    return EndpointDescriptor("PATCH", path)


ENDPOINTS: Mapping[str, EndpointDescriptor] = MappingProxyType({
    # Visits
    "get_visits": _list("/visits"),
    "create_visit": _post("/visits"),
    "update_visit": _patch("/visits/{visit_id}"),
    "check_out_visit": _post("/visits/{visit_id}/check-out"),
    # Accounts
    "get_accounts": _list("/accounts"),
    "get_account": _get("/accounts/{account_id}"),
    "create_account": _post("/accounts"),
    "update_account": _patch("/accounts/{account_id}"),
    # Appointment types
    "get_appointment_types": _list("/appointment-types"),
    "get_appointment_type": _get("/appointment-types/{appointment_type_id}"),
    # Alerts
    "get_alerts": _list("/alerts"),
    "get_alert": _get("/alerts/{alert_id}"),
    # Appointments
    "get_appointments": _list("/appointments"),
    "get_appointment": _get("/appointments/{appointment_id}"),
    "update_appointment": _patch("/appointments/{appointment_id}"),
    "cancel_appointment": _post("/appointments/{appointment_id}/cancel"),
    # Breeds
    "get_breeds": _list("/breeds"),
    # Prescriptions
    "get_dispensed_prescriptions": _list("/dispensed-prescriptions"),
    "get_dispensed_prescription": _get("/dispensed-prescriptions/{prescription_id}"),
    "get_external_prescriptions": _list("/external-prescriptions"),
    "get_external_prescription": _get("/external-prescriptions/{prescription_id}"),
    # Invoices
    "get_invoices": _list("/invoices"),
    "get_invoice": _get("/invoices/{invoice_id}"),
    "create_invoice": _post("/invoices"),
    "create_standalone_invoice": _post("/invoices/standalone"),
    "get_invoice_ledger_entries": _list("/invoice-ledger-entries"),
    "get_invoice_line_items": _list("/invoices/{invoice_id}/line-items"),
    "get_invoice_line_item": _get("/invoice-line-items/{line_item_id}"),
    "add_invoice_line_item": _post("/invoices/{invoice_id}/line-items"),
    # Locations
    "get_locations": _list("/locations"),
    "get_location": _get("/locations/{location_id}"),
    # Orders and treatments
    "get_order": _get("/orders/{order_id}"),
    "get_orders_by_visit": _list("/visits/{visit_id}/orders"),
    "get_treatments_by_order": _list("/orders/{order_id}/treatments"),
    "get_treatment": _get("/treatments/{treatment_id}"),
    # Patients
    "get_patients": _list("/patients"),
    "get_patient": _get("/patients/{patient_id}"),
    "create_patient": _post("/patients"),
    "update_patient": _patch("/patients/{patient_id}"),
    "transfer_patient": _post("/patients/{patient_id}/transfer"),
    "upload_patient_file": _post("/patients/{patient_id}/files"),
    # Payments
    "get_payment_transactions": _list("/payments/transactions"),
    # PDFs
    "request_pdf": _post("/pdfs"),
    "get_pdf_request_status": _get("/pdfs/{request_id}"),
    # Products
    "get_products": _list("/products"),
    "get_product": _get("/products/{product_id}"),
    # Reminders
    "get_reminder_labels": _list("/reminder-labels"),
    "get_reminder_label": _get("/reminder-labels/{label_id}"),
    "get_reminders": _list("/reminders"),
    "get_reminder": _get("/reminders/{reminder_id}"),
    # Services
    "get_services": _list("/services"),
    "get_service": _get("/services/{service_id}"),
    # Users and titles
    "get_titles": _list("/titles"),
    "get_title": _get("/titles/{title_id}"),
    "get_users": _list("/users"),
    "get_user": _get("/users/{user_id}"),
})
