from django.test import SimpleTestCase

from algorithms.availability.part_hierarchy import (
    BookingStatus,
    Part,
    PartHierarchy,
)
from core.exceptions import InvalidBookingIntervalError

from .fixtures import at, create_booking, create_nested_gym


class PartHierarchyTest(SimpleTestCase):
    """Test cases for the part hierarchy view"""

    def setUp(self):
        self.hierarchy = create_nested_gym().hierarchy

    def test_children_of_parent(self):
        children = self.hierarchy.children("main")
        self.assertEqual([part.id for part in children], ["half-a", "half-b"])

    def test_children_of_leaf_and_unknown(self):
        self.assertEqual(self.hierarchy.children("half-a"), [])
        self.assertEqual(self.hierarchy.children("nope"), [])
        self.assertEqual(self.hierarchy.children(None), [])

    def test_parent(self):
        self.assertEqual(self.hierarchy.parent("half-b").id, "main")
        self.assertIsNone(self.hierarchy.parent("main"))
        self.assertIsNone(self.hierarchy.parent("nope"))

    def test_top_level_keeps_order(self):
        self.assertEqual([part.id for part in self.hierarchy.top_level()], ["main", "court"])

    def test_descendants(self):
        hierarchy = PartHierarchy(
            [
                Part(id="a", name="A"),
                Part(id="b", name="B", parent_id="a"),
                Part(id="c", name="C", parent_id="b"),
            ]
        )
        self.assertEqual([part.id for part in hierarchy.descendants("a")], ["b", "c"])

    def test_dangling_parent_is_top_level(self):
        hierarchy = PartHierarchy(
            [Part(id="x", name="X", parent_id="missing"), Part(id="y", name="Y", parent_id="y")]
        )

        self.assertIsNone(hierarchy.parent("x"))
        self.assertIsNone(hierarchy.parent("y"))
        self.assertEqual(hierarchy.children("y"), [])
        self.assertEqual(len(hierarchy.top_level()), 2)

    def test_contains_and_len(self):
        self.assertIn("court", self.hierarchy)
        self.assertNotIn("nope", self.hierarchy)
        self.assertEqual(len(self.hierarchy), 4)


class BookingRecordTest(SimpleTestCase):
    """Test cases for the booking record"""

    def test_start_must_precede_end(self):
        with self.assertRaises(InvalidBookingIntervalError):
            create_booking("b1", at(10), at(10))

        with self.assertRaises(ValueError):
            create_booking("b1", at(11), at(10))

    def test_active_statuses(self):
        self.assertTrue(create_booking("b1", at(9), at(10), status="pending").is_active)
        self.assertTrue(create_booking("b2", at(9), at(10), status="approved").is_active)
        self.assertTrue(
            create_booking("b3", at(9), at(10), status=BookingStatus.APPROVED).is_active
        )
        self.assertFalse(create_booking("b4", at(9), at(10), status="rejected").is_active)
        self.assertFalse(create_booking("b5", at(9), at(10), status="cancelled").is_active)

    def test_whole_resource(self):
        self.assertTrue(create_booking("b1", at(9), at(10)).is_whole_resource)
        self.assertFalse(create_booking("b2", at(9), at(10), part_id="court").is_whole_resource)
