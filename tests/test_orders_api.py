"""Integration tests for the order lifecycle endpoints."""

import uuid

from sqlmodel import select

from app.models.order import Order
from app.models.user import User
from app.services.order_service import generate_order_number
from conftest import NYC_DELIVERY, NYC_PICKUP, order_payload


def assign(client, admin, order_id, partner_id):
    return client.put(
        f"/api/orders/{order_id}/assign",
        json={"partnerId": partner_id},
        headers=admin["headers"],
    )


def set_status(client, caller, order_id, status):
    return client.put(
        f"/api/orders/{order_id}/status",
        json={"status": status},
        headers=caller["headers"],
    )


class TestOrderNumber:
    def test_format(self):
        prefix, millis, suffix = generate_order_number().split("-")
        assert prefix == "ORD"
        assert millis.isdigit()
        assert 0 <= int(suffix) <= 999


class TestCreateOrder:
    def test_new_order_is_pending_and_unassigned(self, client, admin):
        response = client.post("/api/orders", json=order_payload(), headers=admin["headers"])

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Order created successfully"
        order = data["order"]
        assert order["status"] == "pending"
        assert order["assignedTo"] is None
        assert order["assignedPartner"] is None
        assert order["orderNumber"].startswith("ORD-")
        assert order["pickupLocation"] == NYC_PICKUP
        assert order["deliveryLocation"] == NYC_DELIVERY

    def test_notes_are_trimmed(self, create_order):
        assert create_order(notes="  ring twice ")["notes"] == "ring twice"
        assert create_order(notes="   ")["notes"] is None

    def test_partner_cannot_create(self, client, partner):
        response = client.post(
            "/api/orders", json=order_payload(), headers=partner["headers"]
        )
        assert response.status_code == 403

    def test_requires_token(self, client):
        response = client.post("/api/orders", json=order_payload())
        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}

    def test_client_cannot_set_status_or_assignee(self, client, admin, partner):
        response = client.post(
            "/api/orders",
            json=order_payload(status="delivered", assignedTo=partner["id"]),
            headers=admin["headers"],
        )
        assert response.status_code == 400

    def test_validation(self, client, admin):
        bad_payloads = [
            order_payload(customerName="  "),
            order_payload(pickupLocation={"lat": "north", "lng": 1}),
            order_payload(deliveryLocation={"lat": 91, "lng": 0}),
            order_payload(pickupLocation={"lat": "40.7", "lng": -74.0}),
            order_payload(pickupLocation={"lat": 40.7, "lng": True}),
            {k: v for k, v in order_payload().items() if k != "deliveryAddress"},
        ]
        for body in bad_payloads:
            response = client.post("/api/orders", json=body, headers=admin["headers"])
            assert response.status_code == 400, body

    def test_integer_coordinates_accepted(self, create_order):
        order = create_order(pickupLocation={"lat": 40, "lng": -74})
        assert order["pickupLocation"] == {"lat": 40.0, "lng": -74.0}


class TestAssignOrder:
    def test_assign_sets_partner_and_status(self, client, admin, partner, create_order):
        order = create_order()

        response = assign(client, admin, order["id"], partner["id"])

        assert response.status_code == 200
        assigned = response.json()["order"]
        assert assigned["status"] == "assigned"
        assert assigned["assignedTo"] == partner["id"]
        assert assigned["assignedPartner"]["email"] == "p@x.com"
        assert assigned["assignedPartner"]["phone"] == "555-0001"

    def test_unknown_partner_leaves_order_unchanged(self, client, admin, create_order):
        order = create_order()

        response = assign(client, admin, order["id"], str(uuid.uuid4()))

        assert response.status_code == 404
        assert response.json() == {"error": "Partner not found"}
        current = client.get(f"/api/orders/{order['id']}", headers=admin["headers"])
        assert current.json()["order"]["status"] == "pending"
        assert current.json()["order"]["assignedTo"] is None

    def test_admin_is_not_a_partner(self, client, admin, create_order):
        order = create_order()

        response = assign(client, admin, order["id"], admin["id"])

        assert response.status_code == 404

    def test_unknown_order(self, client, admin, partner):
        response = assign(client, admin, str(uuid.uuid4()), partner["id"])
        assert response.status_code == 404
        assert response.json() == {"error": "Order not found"}

    def test_missing_partner_id(self, client, admin, create_order):
        order = create_order()
        response = client.put(
            f"/api/orders/{order['id']}/assign", json={}, headers=admin["headers"]
        )
        assert response.status_code == 400

    def test_partner_cannot_assign(self, client, partner, create_order):
        order = create_order()
        response = assign(client, partner, order["id"], partner["id"])
        assert response.status_code == 403

    def test_reassignment_overwrites_partner(
        self, client, admin, partner, other_partner, create_order
    ):
        order = create_order()
        assign(client, admin, order["id"], partner["id"])
        set_status(client, partner, order["id"], "picked_up")

        response = assign(client, admin, order["id"], other_partner["id"])

        assert response.status_code == 200
        assert response.json()["order"]["assignedTo"] == other_partner["id"]
        assert response.json()["order"]["status"] == "assigned"


class TestUpdateStatus:
    def test_full_delivery_scenario(self, client, admin, partner, other_partner):
        created = client.post(
            "/api/orders", json=order_payload(), headers=admin["headers"]
        ).json()["order"]
        assert created["status"] == "pending"

        assigned = assign(client, admin, created["id"], partner["id"]).json()["order"]
        assert assigned["status"] == "assigned"
        assert assigned["assignedTo"] == partner["id"]

        picked = set_status(client, partner, created["id"], "picked_up")
        assert picked.status_code == 200
        assert picked.json()["order"]["status"] == "picked_up"

        intruder = set_status(client, other_partner, created["id"], "picked_up")
        assert intruder.status_code == 403

        delivered = set_status(client, partner, created["id"], "delivered")
        assert delivered.status_code == 200
        assert delivered.json()["order"]["status"] == "delivered"

    def test_other_partner_forbidden_and_order_unchanged(
        self, client, admin, partner, other_partner, create_order
    ):
        order = create_order()
        assign(client, admin, order["id"], partner["id"])

        response = set_status(client, other_partner, order["id"], "picked_up")

        assert response.status_code == 403
        assert response.json() == {"error": "Access denied"}
        current = client.get(f"/api/orders/{order['id']}", headers=admin["headers"])
        assert current.json()["order"]["status"] == "assigned"

    def test_admin_may_advance(self, client, admin, partner, create_order):
        order = create_order()
        assign(client, admin, order["id"], partner["id"])

        response = set_status(client, admin, order["id"], "picked_up")

        assert response.status_code == 200
        assert response.json()["message"] == "Order status updated successfully"

    def test_cannot_skip_or_go_backwards(self, client, admin, partner, create_order):
        order = create_order()
        assign(client, admin, order["id"], partner["id"])

        skipped = set_status(client, partner, order["id"], "delivered")
        assert skipped.status_code == 400
        assert skipped.json()["error"] == "Invalid status transition: assigned -> delivered"

        set_status(client, partner, order["id"], "picked_up")
        set_status(client, partner, order["id"], "delivered")
        backwards = set_status(client, partner, order["id"], "picked_up")
        assert backwards.status_code == 400

    def test_pending_order_cannot_be_picked_up(self, client, admin, create_order):
        order = create_order()
        response = set_status(client, admin, order["id"], "picked_up")
        assert response.status_code == 400

    def test_same_status_is_noop(self, client, admin, partner, create_order):
        order = create_order()
        assign(client, admin, order["id"], partner["id"])
        set_status(client, partner, order["id"], "picked_up")

        response = set_status(client, partner, order["id"], "picked_up")

        assert response.status_code == 200
        assert response.json()["order"]["status"] == "picked_up"

    def test_only_delivery_statuses_accepted(self, client, admin, create_order):
        order = create_order()
        for status in ["assigned", "cancelled", "pending", "lost"]:
            assert set_status(client, admin, order["id"], status).status_code == 400

    def test_unknown_order(self, client, admin):
        response = set_status(client, admin, str(uuid.uuid4()), "picked_up")
        assert response.status_code == 404


class TestVisibility:
    def test_admin_sees_all_newest_first(self, client, admin, create_order):
        first = create_order(customerName="First")
        second = create_order(customerName="Second")

        response = client.get("/api/orders", headers=admin["headers"])

        assert response.status_code == 200
        ids = [o["id"] for o in response.json()["orders"]]
        assert ids == [second["id"], first["id"]]

    def test_partner_sees_only_own_orders(
        self, client, admin, partner, other_partner, create_order
    ):
        mine = create_order()
        theirs = create_order()
        create_order()  # unassigned
        assign(client, admin, mine["id"], partner["id"])
        assign(client, admin, theirs["id"], other_partner["id"])

        response = client.get("/api/orders", headers=partner["headers"])

        orders = response.json()["orders"]
        assert [o["id"] for o in orders] == [mine["id"]]
        assert all(o["assignedTo"] == partner["id"] for o in orders)

    def test_partner_get_foreign_order_forbidden(
        self, client, admin, partner, other_partner, create_order
    ):
        order = create_order()
        assign(client, admin, order["id"], other_partner["id"])

        assert client.get(
            f"/api/orders/{order['id']}", headers=partner["headers"]
        ).status_code == 403
        assert client.get(
            f"/api/orders/{order['id']}", headers=other_partner["headers"]
        ).status_code == 200

    def test_get_unknown_order(self, client, admin):
        response = client.get(f"/api/orders/{uuid.uuid4()}", headers=admin["headers"])
        assert response.status_code == 404

    def test_malformed_id_is_validation_error(self, client, admin):
        response = client.get("/api/orders/not-a-uuid", headers=admin["headers"])
        assert response.status_code == 400

    def test_dangling_partner_reference(self, client, admin, partner, create_order, session):
        order = create_order()
        assign(client, admin, order["id"], partner["id"])
        user = session.get(User, uuid.UUID(partner["id"]))
        session.delete(user)
        session.commit()

        response = client.get(f"/api/orders/{order['id']}", headers=admin["headers"])

        assert response.status_code == 200
        assert response.json()["order"]["assignedTo"] == partner["id"]
        assert response.json()["order"]["assignedPartner"] is None


class TestDeleteOrder:
    def test_delete_removes_order(self, client, admin, create_order, session):
        order = create_order()

        response = client.delete(f"/api/orders/{order['id']}", headers=admin["headers"])

        assert response.status_code == 200
        assert response.json() == {"message": "Order deleted successfully"}
        assert session.exec(select(Order)).all() == []
        assert client.get(
            f"/api/orders/{order['id']}", headers=admin["headers"]
        ).status_code == 404

    def test_delete_unknown(self, client, admin):
        response = client.delete(f"/api/orders/{uuid.uuid4()}", headers=admin["headers"])
        assert response.status_code == 404

    def test_partner_cannot_delete(self, client, admin, partner, create_order):
        order = create_order()
        assign(client, admin, order["id"], partner["id"])

        response = client.delete(f"/api/orders/{order['id']}", headers=partner["headers"])

        assert response.status_code == 403
