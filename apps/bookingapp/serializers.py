# apps/bookingapp/serializers.py
import uuid

from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from algorithms.availability.part_hierarchy import (
    BlockingPolicy,
    Booking,
    BookingStatus,
    Part,
    Resource,
)
from algorithms.availability.recurrence_expander import RecurrenceCadence

BOOKING_STATUS_CHOICES = [status.value for status in BookingStatus]
RECURRENCE_CHOICES = [cadence.value for cadence in RecurrenceCadence]


def validate_interval(data, start_key="start", end_key="end"):
    """Shared start < end check for booking payloads"""
    start = data.get(start_key)
    end = data.get(end_key)
    if start is not None and end is not None and start >= end:
        raise serializers.ValidationError(
            {"end_time": _("End time must be after start time")}
        )
    return data


class PartSerializer(serializers.Serializer):
    """Serializer for resource parts"""

    id = serializers.CharField()
    name = serializers.CharField(max_length=255)
    parent_id = serializers.CharField(required=False, allow_null=True, default=None)

    def create(self, validated_data):
        return Part(**validated_data)


class ResourceSerializer(serializers.Serializer):
    """Serializer for a resource with its parts and blocking flags"""

    id = serializers.CharField()
    name = serializers.CharField(max_length=255)
    color = serializers.CharField(
        max_length=20, required=False, allow_null=True, allow_blank=True, default=None
    )
    allow_whole_booking = serializers.BooleanField(
        source="policy.allow_whole_booking", default=True
    )
    block_parts_when_whole_booked = serializers.BooleanField(
        source="policy.block_parts_when_whole_booked", default=True
    )
    block_whole_when_part_booked = serializers.BooleanField(
        source="policy.block_whole_when_part_booked", default=True
    )
    min_booking_minutes = serializers.IntegerField(
        required=False, allow_null=True, min_value=1, default=None
    )
    max_booking_minutes = serializers.IntegerField(
        required=False, allow_null=True, min_value=1, default=None
    )
    requires_approval = serializers.BooleanField(default=True)
    parts = PartSerializer(many=True, required=False, default=list)

    def validate(self, data):
        """Validate that the booking length limits are consistent"""
        minimum = data.get("min_booking_minutes")
        maximum = data.get("max_booking_minutes")
        if minimum is not None and maximum is not None and minimum > maximum:
            raise serializers.ValidationError(
                {
                    "max_booking_minutes": _(
                        "Maximum booking length must not be less than the minimum"
                    )
                }
            )
        return data

    def create(self, validated_data):
        policy = BlockingPolicy(**validated_data.pop("policy", {}))
        parts = tuple(Part(**part) for part in validated_data.pop("parts", []))
        return Resource(policy=policy, parts=parts, **validated_data)


class BookingSerializer(serializers.Serializer):
    """Serializer for bookings supplied by the surrounding application"""

    id = serializers.CharField(required=False)
    resource_id = serializers.CharField()
    part_id = serializers.CharField(required=False, allow_null=True, default=None)
    title = serializers.CharField(required=False, allow_blank=True, default="")
    start_time = serializers.DateTimeField(source="start")
    end_time = serializers.DateTimeField(source="end")
    status = serializers.ChoiceField(
        choices=BOOKING_STATUS_CHOICES, default=BookingStatus.PENDING.value
    )
    is_recurring = serializers.BooleanField(default=False)
    parent_booking_id = serializers.CharField(
        required=False, allow_null=True, default=None
    )

    def validate(self, data):
        """Validate that the booking starts before it ends"""
        return validate_interval(data)

    def create(self, validated_data):
        validated_data.setdefault("id", str(uuid.uuid4()))
        return Booking(**validated_data)


class RecurrenceRequestSerializer(serializers.Serializer):
    """Serializer for a (possibly recurring) booking request"""

    resource_id = serializers.CharField()
    part_id = serializers.CharField(required=False, allow_null=True, default=None)
    title = serializers.CharField(max_length=255)
    start_time = serializers.DateTimeField(source="start")
    end_time = serializers.DateTimeField(source="end")
    is_recurring = serializers.BooleanField(default=False)
    recurring_type = serializers.ChoiceField(
        choices=RECURRENCE_CHOICES, required=False, allow_null=True, default=None
    )
    recurring_end_date = serializers.DateField(
        required=False, allow_null=True, default=None
    )

    def validate(self, data):
        """Validate interval and that recurring requests carry a cadence and end date"""
        validate_interval(data)

        if data.get("is_recurring"):
            errors = {}
            if not data.get("recurring_type"):
                errors["recurring_type"] = _("Recurring bookings need a recurrence type")
            if not data.get("recurring_end_date"):
                errors["recurring_end_date"] = _("Recurring bookings need an end date")
            if errors:
                raise serializers.ValidationError(errors)

        return data


class BlockedSlotSerializer(serializers.Serializer):
    """Read-only serializer for derived blocked slots"""

    start_time = serializers.DateTimeField(source="start", read_only=True)
    end_time = serializers.DateTimeField(source="end", read_only=True)
    part_id = serializers.CharField(read_only=True, allow_null=True)
    blocked_by = serializers.CharField(read_only=True)
    booking_id = serializers.CharField(read_only=True)


class PositionedItemSerializer(serializers.Serializer):
    """Read-only serializer for laid out calendar items"""

    item_id = serializers.CharField(read_only=True)
    start_time = serializers.DateTimeField(source="start", read_only=True)
    end_time = serializers.DateTimeField(source="end", read_only=True)
    column = serializers.IntegerField(read_only=True)
    total_columns = serializers.IntegerField(read_only=True)
    left_percent = serializers.FloatField(read_only=True)
    width_percent = serializers.FloatField(read_only=True)
    gap_pixels = serializers.IntegerField(read_only=True)
    top_pixels = serializers.FloatField(read_only=True)
    height_pixels = serializers.FloatField(read_only=True)
    start_percent = serializers.FloatField(read_only=True)
    length_percent = serializers.FloatField(read_only=True)
    adjacent_above = serializers.BooleanField(read_only=True)
    adjacent_below = serializers.BooleanField(read_only=True)
    style = serializers.SerializerMethodField()

    def get_style(self, obj):
        return obj.as_css()
