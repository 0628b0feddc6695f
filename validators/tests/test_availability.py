from unittest import TestCase

from validators.availability import (
    Availability,
    AvailabilityValidationError,
    is_availability_set,
    validate_availability,
)


class TestAvailabilityValidation(TestCase):
    def test_valid_availability(self):
        result = validate_availability(
            {"monday": ["evening", "morning", "evening"], "sunday": []}
        )
        # duplicates dropped, slots in day order
        self.assertEqual(result, {"monday": ["morning", "evening"], "sunday": []})

    def test_none_is_allowed(self):
        self.assertIsNone(validate_availability(None))

    def test_model_instance(self):
        availability = Availability.model_validate({"friday": ["afternoon"]})
        self.assertEqual(validate_availability(availability), {"friday": ["afternoon"]})

    def test_unknown_day(self):
        with self.assertRaises(AvailabilityValidationError):
            validate_availability({"funday": ["morning"]})

    def test_unknown_slot(self):
        with self.assertRaises(AvailabilityValidationError):
            validate_availability({"monday": ["midnight"]})

    def test_wrong_shape(self):
        with self.assertRaises(AvailabilityValidationError):
            validate_availability(["monday"])
        with self.assertRaises(AvailabilityValidationError):
            validate_availability({"monday": "morning"})

    def test_is_availability_set(self):
        self.assertFalse(is_availability_set(None))
        self.assertFalse(is_availability_set({}))
        self.assertFalse(is_availability_set("{}"))
        self.assertTrue(is_availability_set({"monday": []}))
        self.assertTrue(
            is_availability_set(Availability.model_validate({"monday": ["morning"]}))
        )
