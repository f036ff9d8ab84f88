"""Pure business rules: loyalty tiers, stock arithmetic, image checks."""

import base64
import re

import pytest

from autoshop.customers import loyalty_tier
from autoshop.hr import leave_action, task_action
from autoshop.inventory import TransactionType, compute_new_stock
from autoshop.service_visits import validate_images
from autoshop.utils import generate_reference

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "visits, tier, discount",
    [
        (0, "Bronze", 0),
        (4, "Bronze", 0),
        (5, "Silver", 5),
        (9, "Silver", 5),
        (10, "Gold", 10),
        (19, "Gold", 10),
        (20, "Platinum", 15),
        (57, "Platinum", 15),
    ],
)
def test_loyalty_tier_thresholds(visits, tier, discount):
    result = loyalty_tier(visits)
    assert result["loyalty_tier"] == tier
    assert result["discount_percentage"] == discount
    assert result["loyalty_points"] == visits * 10


@pytest.mark.parametrize(
    "tx_type, current, qty, expected",
    [
        (TransactionType.IN, 10, 5, 15),
        (TransactionType.RETURN, 10, 2, 12),
        (TransactionType.OUT, 10, 3, 7),
        (TransactionType.ADJUSTMENT, 10, 4, 4),
        ("ADJUSTMENT", 0, 25, 25),
    ],
)
def test_compute_new_stock(tx_type, current, qty, expected):
    assert compute_new_stock(tx_type, current, qty) == expected


def test_compute_new_stock_rejects_unknown_type():
    with pytest.raises(ValueError):
        compute_new_stock("TRANSFER", 1, 1)


def _png(size_bytes: int = 16) -> str:
    return "data:image/png;base64," + base64.b64encode(b"\x89PNG" + b"0" * size_bytes).decode()


def test_valid_images_pass():
    assert validate_images([_png(), _png().replace("png", "webp", 1), ""])
    assert validate_images([])
    assert validate_images(None)


@pytest.mark.parametrize(
    "image",
    [
        "https://example.com/car.png",
        "data:image/bmp;base64,AAAA",
        "data:image/png;base64,not base64!",
        "data:text/plain;base64,AAAA",
    ],
)
def test_invalid_images_fail(image):
    assert not validate_images([_png(), image])


def test_images_over_15mb_fail():
    # 21 MB of base64 text ≈ 15.75 MB decoded
    oversized = "data:image/jpeg;base64," + "A" * (21 * 1024 * 1024)
    assert not validate_images([oversized])


def test_leave_and_task_activity_verbs():
    assert leave_action("approved") == "approve"
    assert leave_action("rejected") == "reject"
    assert leave_action("pending") == "update"
    assert leave_action(None) == "update"
    assert task_action("completed") == "complete"
    assert task_action("in_progress") == "update"


def test_generate_reference_format():
    ref = generate_reference("ORD")
    assert re.fullmatch(r"ORD-\d{13}-\d{1,3}", ref)
