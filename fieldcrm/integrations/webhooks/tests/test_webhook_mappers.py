"""Tests for mapping lead-source payloads onto leads."""

import pytest

from fieldcrm.db.jobs.constants import MISSING_PHONE
from fieldcrm.db.leads.constants import LeadPriority
from fieldcrm.integrations.webhooks import mappers
from fieldcrm.integrations.webhooks.mappers import InvalidLeadPayloadError
from fieldcrm.integrations.webhooks.schemas import (
    AngiPayload,
    ELocalPayload,
    InquirlyPayload,
    NetworxPayload,
    ThumbtackPayload,
    ZapierPayload,
)


class TestELocal:
    def test_joins_first_and_last_name(self):
        lead = mappers.from_elocal(
            ELocalPayload(
                first_name="Maria",
                last_name="Gomez",
                phone="312-555-0100",
                zip_code="60614",
                need_id="Sewer Repair",
            )
        )

        assert lead.source == "eLocal"
        assert lead.customer_name == "Maria Gomez"
        assert lead.zip_code == "60614"
        assert lead.service_type == "Sewer Repair"

    def test_missing_name_uses_placeholder(self):
        lead = mappers.from_elocal(ELocalPayload(phone="312-555-0100"))

        assert lead.customer_name == "Unknown"

    def test_missing_phone_is_rejected(self):
        with pytest.raises(InvalidLeadPayloadError, match="Phone number is required"):
            mappers.from_elocal(ELocalPayload(first_name="Maria"))


def test_networx_maps_fields():
    lead = mappers.from_networx(
        NetworxPayload(
            customer_name="Dan Park",
            phone="773-555-0111",
            email="",
            service_type="Water Heater",
        )
    )

    assert lead.source == "Networx"
    assert lead.customer_email is None
    assert lead.service_type == "Water Heater"


def test_angi_maps_category_and_address():
    lead = mappers.from_angi(
        AngiPayload(
            name="Lena Fox",
            phone="773-555-0142",
            address="1200 W Addison St",
            category="Drain Cleaning",
        )
    )

    assert lead.source == "Angi"
    assert lead.customer_address == "1200 W Addison St"
    assert lead.service_type == "Drain Cleaning"


class TestThumbtack:
    def test_reads_nested_payload(self):
        payload = ThumbtackPayload.model_validate(
            {
                "leadID": "tt-9001",
                "customer": {"name": "Sam Cho", "phone": "312-555-0177"},
                "request": {
                    "category": "Sewer Line Repair",
                    "description": "Slow drains throughout the house",
                    "location": {
                        "address": "55 E Monroe St",
                        "city": "Chicago",
                        "zipCode": "60603",
                    },
                },
                "unexpected": "ignored",
            }
        )

        lead = mappers.from_thumbtack(payload)

        assert payload.lead_id == "tt-9001"
        assert lead.source == "Thumbtack"
        assert lead.city == "Chicago"
        assert lead.zip_code == "60603"
        assert lead.description == "Slow drains throughout the house"

    def test_empty_payload_has_no_phone(self):
        with pytest.raises(InvalidLeadPayloadError):
            mappers.from_thumbtack(ThumbtackPayload())


class TestInquirly:
    @pytest.mark.parametrize(
        "urgency,expected",
        [
            ("emergency", LeadPriority.URGENT),
            ("HIGH", LeadPriority.URGENT),
            ("medium", LeadPriority.HIGH),
            ("low", LeadPriority.NORMAL),
            (None, LeadPriority.NORMAL),
        ],
    )
    def test_urgency_to_priority(self, urgency, expected):
        lead = mappers.from_inquirly(
            InquirlyPayload(
                contact_name="Ava Patel",
                contact_phone="312-555-0190",
                urgency=urgency,
            )
        )

        assert lead.priority == expected

    def test_summary_becomes_description(self):
        lead = mappers.from_inquirly(
            InquirlyPayload(
                contact_phone="312-555-0190",
                conversation_summary="Customer reports sewage smell in basement",
                service_requested="Camera Inspection",
            )
        )

        assert lead.source == "Inquirly"
        assert lead.description == "Customer reports sewage smell in basement"
        assert lead.service_type == "Camera Inspection"


class TestZapier:
    def test_accepts_alternate_spellings(self):
        lead = mappers.from_zapier(
            ZapierPayload(
                name="Chris Wu",
                customer_phone="312-555-0155",
                zipCode="60657",
                serviceType="Hydro Jetting",
                notes="Found us on Google",
            )
        )

        assert lead.source == "Zapier"
        assert lead.customer_name == "Chris Wu"
        assert lead.customer_phone == "312-555-0155"
        assert lead.zip_code == "60657"
        assert lead.service_type == "Hydro Jetting"
        assert lead.description == "Found us on Google"

    def test_phone_is_optional(self):
        lead = mappers.from_zapier(ZapierPayload(customer_name="Chris Wu"))

        assert lead.customer_phone == MISSING_PHONE
        assert lead.customer_phone == "No phone provided"

    def test_custom_source_and_priority(self):
        lead = mappers.from_zapier(
            ZapierPayload(phone="312-555-0155", source="Website", priority="urgent")
        )

        assert lead.source == "Website"
        assert lead.priority == LeadPriority.URGENT

    def test_invalid_priority(self):
        with pytest.raises(InvalidLeadPayloadError, match="Invalid lead data"):
            mappers.from_zapier(ZapierPayload(phone="312-555-0155", priority="asap"))
