"""Wizard steps and the gates that decide whether the owner may move forward."""

from collections.abc import Callable
from decimal import Decimal, InvalidOperation
from enum import IntEnum
from typing import Any

from staylist.listing.catalog import PROPERTY_TYPES
from staylist.listing.errors import StepGateError
from staylist.listing.form import ListingForm, PropertyDraft


class WizardStep(IntEnum):
    PROPERTY_TYPE = 1
    DETAILS = 2
    AMENITIES = 3
    ROOMS = 4
    POLICIES = 5
    PHOTOS = 6
    REVIEW = 7


FIRST_STEP = WizardStep.PROPERTY_TYPE
LAST_STEP = WizardStep.REVIEW


def parse_price(value: Any) -> Decimal | None:
    """Return *value* as a finite Decimal, or None if it is missing or not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        value = str(value)
    try:
        price = Decimal(value.strip() if isinstance(value, str) else value)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not price.is_finite():
        return None
    return price


def _property_type_errors(draft: PropertyDraft) -> list[str]:
    if draft.property_type not in PROPERTY_TYPES:
        return [f"Choose a property type ({' or '.join(PROPERTY_TYPES)})"]
    return []


def _details_errors(draft: PropertyDraft) -> list[str]:
    labels = {
        "name": "Property name",
        "street_address": "Street address",
        "city": "City",
        "state": "State",
    }
    errors = []
    for field_name, label in labels.items():
        value = getattr(draft, field_name)
        if not isinstance(value, str) or not value.strip():
            errors.append(f"{label} is required")
    return errors


def _review_errors(draft: PropertyDraft) -> list[str]:
    errors = []
    for index, room in enumerate(draft.rooms):
        price = parse_price(room.price_lkr)
        if price is None:
            errors.append(f"Room {index + 1}: price is required and must be a number")
        elif price < 0:
            errors.append(f"Room {index + 1}: price cannot be negative")
    return errors


def _no_gate(draft: PropertyDraft) -> list[str]:
    return []


GATES: dict[WizardStep, Callable[[PropertyDraft], list[str]]] = {
    WizardStep.PROPERTY_TYPE: _property_type_errors,
    WizardStep.DETAILS: _details_errors,
    WizardStep.AMENITIES: _no_gate,
    WizardStep.ROOMS: _no_gate,
    WizardStep.POLICIES: _no_gate,
    WizardStep.PHOTOS: _no_gate,
    WizardStep.REVIEW: _review_errors,
}


def step_errors(step: int, draft: PropertyDraft) -> list[str]:
    """Messages explaining why *step* cannot be left forward; empty when it can."""
    return GATES[WizardStep(step)](draft)


def can_advance(step: int, draft: PropertyDraft) -> bool:
    return not step_errors(step, draft)


def advance(form: ListingForm) -> int:
    """Move *form* one step forward, or raise ``StepGateError`` if the gate is closed."""
    errors = step_errors(form.step, form.draft)
    if errors:
        raise StepGateError(form.step, errors)
    if form.step < LAST_STEP:
        form.step += 1
    return form.step


def go_back(form: ListingForm) -> int:
    """Move one step back. Never validates and never touches the draft."""
    if form.step > FIRST_STEP:
        form.step -= 1
    return form.step


def validate_for_submit(draft: PropertyDraft) -> None:
    """Run every gate; raise ``StepGateError`` for the first step with failures."""
    for step, gate in GATES.items():
        errors = gate(draft)
        if errors:
            raise StepGateError(step, errors)
