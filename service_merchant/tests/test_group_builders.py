"""
Unit tests for shop group request builders.
"""

import pytest

from service_merchant.app.domain import Credential, HttpMethod
from service_merchant.app.groups import builders

PREFIX = "https://api.weixin.qq.com/merchant/"


@pytest.fixture
def credential():
    return Credential(value="ACCESS TOKEN", obtained_at=0, ttl_seconds=7200)


def test_url_embeds_encoded_credential(credential):
    """Test URL carries the encoded access token."""
    request = builders.delete_group(PREFIX, 19)(credential)
    assert request.url == "https://api.weixin.qq.com/merchant/group/del?access_token=ACCESS+TOKEN"
    assert request.method == HttpMethod.POST
    assert request.payload == {"group_id": 19}


def test_create_group_payload(credential):
    """Test create group payload."""
    request = builders.create_group(PREFIX, "new arrivals", ["p1", "p2"])(credential)
    assert request.url.startswith(PREFIX + "group/add?")
    assert request.payload == {
        "group_detail": {"group_name": "new arrivals", "product_list": ["p1", "p2"]}
    }


def test_create_group_without_products(credential):
    """Test create group without products."""
    request = builders.create_group(PREFIX, "empty")(credential)
    assert request.payload["group_detail"]["product_list"] == []


def test_update_group_payload(credential):
    """Test rename payload."""
    request = builders.update_group(PREFIX, 19, "renamed")(credential)
    assert request.url.startswith(PREFIX + "group/propertymod?")
    assert request.payload == {"group_id": 19, "group_name": "renamed"}


def test_update_group_products_payload(credential):
    """Test product modification payload."""
    request = builders.update_group_products(PREFIX, 19, ["a", "b"], ["c"])(credential)
    assert request.url.startswith(PREFIX + "group/productmod?")
    assert request.payload == {
        "group_id": 19,
        "product": [
            {"product_id": "a", "mod_action": 1},
            {"product_id": "b", "mod_action": 1},
            {"product_id": "c", "mod_action": 0},
        ],
    }


def test_update_group_products_with_nothing(credential):
    """Test product modification with no changes."""
    request = builders.update_group_products(PREFIX, 19)(credential)
    assert request.payload == {"group_id": 19, "product": []}


def test_get_all_groups_is_get_without_body(credential):
    """Test list groups is a GET without body."""
    request = builders.get_all_groups(PREFIX)(credential)
    assert request.method == HttpMethod.GET
    assert request.payload is None
    assert request.url.startswith(PREFIX + "group/getall?")


def test_get_group_by_id_payload(credential):
    """Test get group by id payload."""
    request = builders.get_group_by_id(PREFIX, "200077549")(credential)
    assert request.url.startswith(PREFIX + "group/getbyid?")
    assert request.payload == {"group_id": "200077549"}


def test_builders_rebuild_with_new_credential(credential):
    """Test builders rebuild with a new credential."""
    build = builders.create_group(PREFIX, "g")
    fresh = Credential(value="fresh", obtained_at=10, ttl_seconds=7200)
    assert build(credential).url != build(fresh).url
    assert build(fresh).url.endswith("access_token=fresh")
    assert build.__name__ == "create_group"


def test_each_build_gets_its_own_payload(credential):
    """Test requests from one builder do not share payload objects."""
    build = builders.create_group(PREFIX, "g", ["p1"])
    first = build(credential)
    first.payload["group_detail"]["product_list"].append("p2")

    second = build(credential)

    assert second.payload == {"group_detail": {"group_name": "g", "product_list": ["p1"]}}
    assert second.payload is not first.payload
