from unittest import TestCase

from services.onboarding import build_checklist, completion_from_checklist
from services.opportunities import has_capacity, spots_remaining


class TestOnboardingScoring(TestCase):
    def test_empty_profile(self):
        # Given
        checklist = build_checklist(
            phone=None,
            bio="   ",
            availability={},
            skills_count=0,
            interests_count=0,
            media_release=False,
        )

        # Expect
        self.assertEqual(completion_from_checklist(checklist), 0)
        self.assertFalse(checklist.profile_filled)
        self.assertFalse(checklist.availability_set)

    def test_each_item_is_twenty_percent(self):
        # Given - phone without bio does not fill the profile
        checklist = build_checklist(
            phone="+62811",
            bio=None,
            availability={"friday": []},
            skills_count=1,
            interests_count=0,
            media_release=True,
        )

        # Expect
        self.assertFalse(checklist.profile_filled)
        self.assertTrue(checklist.availability_set)
        self.assertEqual(completion_from_checklist(checklist), 60)

    def test_complete_profile(self):
        # Given
        checklist = build_checklist(
            phone="+62811",
            bio="Retired nurse",
            availability={"monday": ["morning"]},
            skills_count=2,
            interests_count=1,
            media_release=True,
        )

        # Expect
        self.assertEqual(completion_from_checklist(checklist), 100)


class TestOpportunitySpots(TestCase):
    def test_spots_remaining(self):
        self.assertIsNone(spots_remaining(None, 12))
        self.assertEqual(spots_remaining(5, 2), 3)
        self.assertEqual(spots_remaining(2, 2), 0)

    def test_has_capacity(self):
        self.assertTrue(has_capacity(None, 100))
        self.assertTrue(has_capacity(3, 2))
        self.assertFalse(has_capacity(3, 3))
