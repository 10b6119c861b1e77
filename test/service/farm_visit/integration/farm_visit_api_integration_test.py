"""
HTTP API tests

Drive the production app through TestClient: cookie authentication, error
mapping and the request lifecycle over the wire.
"""

import asyncio
import datetime
from collections.abc import Iterator

from fastapi.testclient import TestClient
import pytest

from src.main import app
from src.platform.database.orm_db_setting import get_engine_manager
from src.service.farm_visit.domain.value_object.actor import Actor
from src.service.farm_visit.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from test.service.farm_visit.fixtures import (
    ADMIN,
    BUYER,
    OTHER_SELLER,
    SELLER,
    reset_schema,
    seed_profile,
)


SLOTS = '/api/farm-visit/slots'
REQUESTS = '/api/farm-visit/requests'
FARMS = '/api/farm-visit/farms'

# The wired service reads the real clock
VISIT_DAY = (datetime.date.today() + datetime.timedelta(days=7)).isoformat()


def auth(actor: Actor) -> dict[str, str]:
    return {'Cookie': f'fastapiusersauth={JwtAuth().create_jwt_token(actor)}'}


async def _prepare_database() -> None:
    await reset_schema()
    await seed_profile(seller_id=SELLER.user_id)
    await get_engine_manager().dispose()


@pytest.fixture
def client() -> Iterator[TestClient]:
    asyncio.run(_prepare_database())
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


def open_slot(client: TestClient, *, max_visitors: int = 3) -> dict:
    response = client.post(
        SLOTS,
        json={
            'date': VISIT_DAY,
            'start_time': '10:00:00',
            'end_time': '12:00:00',
            'max_visitors': max_visitors,
            'price_per_person': 150,
        },
        headers=auth(SELLER),
    )
    assert response.status_code == 201, response.text
    return response.json()


def submit(client: TestClient, slot: dict, visitors: int, headers: dict | None = None) -> dict:
    response = client.post(
        REQUESTS,
        json={
            'availability_id': slot['id'],
            'number_of_visitors': visitors,
            'visitor_name': 'Mei Lin',
            'visitor_phone': '0912345678',
        },
        headers=headers or {},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.integration
def test_health(client: TestClient) -> None:
    response = client.get('/health')

    assert response.status_code == 200
    assert response.json()['status'] == 'healthy'


@pytest.mark.integration
def test_metrics_count_submissions(client: TestClient) -> None:
    slot = open_slot(client)
    submit(client, slot, 1)

    response = client.get('/metrics')

    assert response.status_code == 200
    assert 'farm_visit_requests_submitted_total' in response.text


@pytest.mark.integration
class TestAuthentication:
    def test_slot_creation_needs_a_cookie(self, client: TestClient) -> None:
        response = client.post(
            SLOTS, json={'date': VISIT_DAY, 'start_time': '10:00:00', 'end_time': '12:00:00'}
        )

        assert response.status_code == 401
        assert response.json()['detail'] == 'Not authenticated'

    def test_bad_token_is_rejected(self, client: TestClient) -> None:
        response = client.get(REQUESTS, headers={'Cookie': 'fastapiusersauth=not-a-jwt'})

        assert response.status_code == 401
        assert response.json()['detail'] == 'Invalid token'

    def test_buyer_cannot_create_slot(self, client: TestClient) -> None:
        response = client.post(
            SLOTS,
            json={'date': VISIT_DAY, 'start_time': '10:00:00', 'end_time': '12:00:00'},
            headers=auth(BUYER),
        )

        assert response.status_code == 403


@pytest.mark.integration
class TestSlotEndpoints:
    def test_created_slot_reports_remaining_capacity(self, client: TestClient) -> None:
        slot = open_slot(client, max_visitors=4)

        assert slot['seller_id'] == SELLER.user_id
        assert slot['current_bookings'] == 0
        assert slot['remaining_capacity'] == 4
        assert slot['visit_type'] == 'farm'

    def test_guest_sees_published_slot(self, client: TestClient) -> None:
        slot = open_slot(client)

        listing = client.get(SLOTS)
        single = client.get(f"{SLOTS}/{slot['id']}")

        assert [s['id'] for s in listing.json()] == [slot['id']]
        assert single.status_code == 200

    def test_current_bookings_is_read_only(self, client: TestClient) -> None:
        slot = open_slot(client)

        response = client.patch(
            f"{SLOTS}/{slot['id']}", json={'current_bookings': 2}, headers=auth(SELLER)
        )

        assert response.status_code == 400
        assert response.json()['detail'] == 'current_bookings cannot be updated'

    def test_owner_updates_slot(self, client: TestClient) -> None:
        slot = open_slot(client)

        response = client.patch(
            f"{SLOTS}/{slot['id']}",
            json={'special_notes': 'Bring boots'},
            headers=auth(SELLER),
        )

        assert response.status_code == 200
        assert response.json()['special_notes'] == 'Bring boots'

    def test_delete_blocked_then_cascaded(self, client: TestClient) -> None:
        slot = open_slot(client)
        submit(client, slot, 1, headers=auth(BUYER))

        blocked = client.delete(f"{SLOTS}/{slot['id']}", headers=auth(SELLER))
        cascaded = client.delete(
            f"{SLOTS}/{slot['id']}", params={'cascade': True}, headers=auth(SELLER)
        )

        assert blocked.status_code == 409
        assert cascaded.status_code == 204
        assert client.get(f"{SLOTS}/{slot['id']}").status_code == 404


@pytest.mark.integration
class TestVisitRequestEndpoints:
    def test_guest_submission(self, client: TestClient) -> None:
        slot = open_slot(client)

        request = submit(client, slot, 2)

        assert request['status'] == 'pending'
        assert request['user_id'] is None
        assert request['requested_date'] == VISIT_DAY

    def test_zero_visitors_is_a_bad_request(self, client: TestClient) -> None:
        slot = open_slot(client)

        response = client.post(
            REQUESTS,
            json={
                'availability_id': slot['id'],
                'number_of_visitors': 0,
                'visitor_name': 'Mei Lin',
                'visitor_phone': '0912345678',
            },
        )

        assert response.status_code == 400

    def test_approval_fills_slot_and_blocks_overbooking(self, client: TestClient) -> None:
        slot = open_slot(client, max_visitors=3)
        first = submit(client, slot, 3, headers=auth(BUYER))
        second = submit(client, slot, 1)

        approved = client.patch(
            f"{REQUESTS}/{first['id']}", json={'decision': 'approve'}, headers=auth(SELLER)
        )
        overbooked = client.patch(
            f"{REQUESTS}/{second['id']}", json={'decision': 'approve'}, headers=auth(SELLER)
        )

        assert approved.status_code == 200
        assert approved.json()['status'] == 'approved'
        assert overbooked.status_code == 409
        stored = client.get(f"{SLOTS}/{slot['id']}", headers=auth(SELLER)).json()
        assert stored['current_bookings'] == 3
        assert stored['remaining_capacity'] == 0

    def test_other_seller_gets_forbidden(self, client: TestClient) -> None:
        slot = open_slot(client)
        request = submit(client, slot, 1)

        response = client.patch(
            f"{REQUESTS}/{request['id']}",
            json={'decision': 'approve'},
            headers=auth(OTHER_SELLER),
        )

        assert response.status_code == 403
        assert response.json()['detail'] == 'You are not allowed to perform this action'

    def test_repeated_cancel_conflicts(self, client: TestClient) -> None:
        slot = open_slot(client)
        request = submit(client, slot, 1, headers=auth(BUYER))

        first = client.patch(
            f"{REQUESTS}/{request['id']}", json={'decision': 'cancel'}, headers=auth(BUYER)
        )
        second = client.patch(
            f"{REQUESTS}/{request['id']}", json={'decision': 'cancel'}, headers=auth(BUYER)
        )

        assert first.status_code == 200
        assert second.status_code == 409

    def test_admin_override(self, client: TestClient) -> None:
        slot = open_slot(client)
        request = submit(client, slot, 2)
        client.patch(
            f"{REQUESTS}/{request['id']}", json={'decision': 'reject'}, headers=auth(SELLER)
        )

        response = client.put(
            f"{REQUESTS}/{request['id']}/override",
            json={'status': 'approved', 'notes': 'Reopened after call'},
            headers=auth(ADMIN),
        )

        assert response.status_code == 200
        assert response.json()['admin_notes'] == '[override] Reopened after call'

    def test_request_listing_by_role(self, client: TestClient) -> None:
        slot = open_slot(client)
        mine = submit(client, slot, 1, headers=auth(BUYER))
        submit(client, slot, 1)

        buyer_view = client.get(REQUESTS, headers=auth(BUYER)).json()
        seller_view = client.get(REQUESTS, headers=auth(SELLER)).json()

        assert [r['id'] for r in buyer_view] == [mine['id']]
        assert len(seller_view) == 2


@pytest.mark.integration
def test_farm_listing(client: TestClient) -> None:
    open_slot(client)

    response = client.get(FARMS, params={'has_availability': True})

    assert response.status_code == 200
    farms = response.json()
    assert [f['seller_id'] for f in farms] == [SELLER.user_id]
    assert farms[0]['available_slots_count'] == 1
