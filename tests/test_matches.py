"""
Tests for match resolution and the matches endpoints.
"""
import pytest

from models.match import Match, canonical_pair
from models.swipe import Swipe, SwipeDirection

from conftest import make_match, register, swipe


def match_rows(storage):
    return storage.get_session().query(Match).all()


class TestResolution:
    def test_one_sided_right_swipe_is_not_a_match(self, client, storage, alice, bob):
        swipe(client, alice, bob, "R")

        assert match_rows(storage) == []
        assert client.get("/matches", headers=alice.headers).get_json()["data"] == []

    def test_left_swipes_never_match(self, client, storage, alice, bob):
        swipe(client, alice, bob, "L")
        swipe(client, bob, alice, "L")
        swipe(client, alice, bob, "L")

        assert match_rows(storage) == []

    def test_right_then_left_is_not_a_match(self, client, storage, alice, bob):
        swipe(client, alice, bob, "R")
        swipe(client, bob, alice, "L")

        assert match_rows(storage) == []

    @pytest.mark.parametrize("first", ["alice", "bob"])
    def test_mutual_right_creates_exactly_one_canonical_match(self, client, storage, alice, bob, first):
        a, b = (alice, bob) if first == "alice" else (bob, alice)
        swipe(client, a, b, "R")
        response = swipe(client, b, a, "R")

        assert response.status_code == 201
        created = response.get_json()["match"]
        rows = match_rows(storage)
        assert len(rows) == 1
        assert rows[0].id == created["id"]
        assert rows[0].user1_id == min(alice.id, bob.id)
        assert rows[0].user2_id == max(alice.id, bob.id)
        assert created["user1"]["id"] == min(alice.id, bob.id)

    def test_repeated_right_swipes_do_not_duplicate(self, client, storage, alice, bob):
        make_match(client, alice, bob)

        again = swipe(client, alice, bob, "R")
        and_again = swipe(client, bob, alice, "R")

        assert "match" not in again.get_json()
        assert "match" not in and_again.get_json()
        assert len(match_rows(storage)) == 1

    def test_match_survives_swipe_deletion(self, client, storage, alice, bob):
        make_match(client, alice, bob)
        for row in client.get(f"/swipes?swiper_id={alice.id}", headers=alice.headers).get_json()["data"]:
            client.delete(f"/swipes/{row['id']}", headers=alice.headers)

        assert len(match_rows(storage)) == 1


class TestResolverService:
    def test_racing_resolutions_converge(self, services, storage, alice, bob):
        # both swipes land before either side is resolved
        ab = Swipe(swiper_id=alice.id, swipee_id=bob.id, direction=SwipeDirection.RIGHT)
        ba = Swipe(swiper_id=bob.id, swipee_id=alice.id, direction=SwipeDirection.RIGHT)
        storage.new(ab)
        storage.new(ba)
        storage.flush()

        first = services.matches.resolve(ab)
        second = services.matches.resolve(ba)
        storage.save()

        assert first is not None
        assert second is None
        assert len(match_rows(storage)) == 1

    def test_insert_if_absent_is_idempotent(self, services, storage, alice, bob):
        repo = services.matches.matches
        lo, hi = canonical_pair(alice.id, bob.id)

        match, created = repo.insert_if_absent(lo, hi)
        same, created_again = repo.insert_if_absent(lo, hi)
        storage.save()

        assert created is True
        assert created_again is False
        assert same.id == match.id

    def test_canonical_pair(self):
        assert canonical_pair("b", "a") == ("a", "b")
        assert canonical_pair("a", "b") == ("a", "b")


class TestListAndGet:
    def test_both_participants_see_the_match(self, client, alice, bob, carol):
        match_id = make_match(client, alice, bob)

        for account in (alice, bob):
            rows = client.get("/matches", headers=account.headers).get_json()["data"]
            assert [r["id"] for r in rows] == [match_id]
            assert {rows[0]["user1"]["id"], rows[0]["user2"]["id"]} == {alice.id, bob.id}
        assert client.get("/matches", headers=carol.headers).get_json()["data"] == []

    def test_profile_summaries(self, client, alice, bob):
        make_match(client, alice, bob)

        row = client.get("/matches", headers=alice.headers).get_json()["data"][0]
        names = {row["user1"]["name"], row["user2"]["name"]}

        assert names == {"Alice Liddell", "Bob"}
        assert {row["user1"]["email"], row["user2"]["email"]} == {"alice@x.com", "bob@x.com"}

    def test_get_match(self, client, alice, bob):
        match_id = make_match(client, alice, bob)

        response = client.get(f"/matches/{match_id}", headers=alice.headers)

        assert response.status_code == 200
        assert response.get_json()["data"]["id"] == match_id

    def test_get_missing_match(self, client, alice):
        assert client.get("/matches/missing", headers=alice.headers).status_code == 404


class TestUpdate:
    def test_participant_can_annotate_and_archive(self, client, alice, bob):
        match_id = make_match(client, alice, bob)

        response = client.put(
            f"/matches/{match_id}", json={"notes": "  coffee on friday ", "archived": True}, headers=bob.headers
        )

        assert response.status_code == 200
        data = response.get_json()["data"]
        assert data["notes"] == "coffee on friday"
        assert data["archived"] is True

    def test_outsider_forbidden(self, client, alice, bob, carol):
        match_id = make_match(client, alice, bob)

        response = client.put(f"/matches/{match_id}", json={"archived": True}, headers=carol.headers)

        assert response.status_code == 403

    def test_missing_match_forbidden(self, client, alice):
        assert client.put("/matches/missing", json={"archived": True}, headers=alice.headers).status_code == 403


class TestDirectCreate:
    def test_create_stores_canonical_order(self, client, storage, alice, bob):
        hi, lo = max(alice.id, bob.id), min(alice.id, bob.id)

        response = client.post("/matches", json={"user1_id": hi, "user2_id": lo}, headers=alice.headers)

        assert response.status_code == 201
        rows = match_rows(storage)
        assert (rows[0].user1_id, rows[0].user2_id) == (lo, hi)

    def test_duplicate_in_either_order_conflicts(self, client, alice, bob):
        client.post("/matches", json={"user1_id": alice.id, "user2_id": bob.id}, headers=alice.headers)

        response = client.post("/matches", json={"user1_id": bob.id, "user2_id": alice.id}, headers=alice.headers)

        assert response.status_code == 409

    def test_conflicts_with_swipe_created_match(self, client, alice, bob):
        make_match(client, alice, bob)

        response = client.post("/matches", json={"user1_id": alice.id, "user2_id": bob.id}, headers=alice.headers)

        assert response.status_code == 409

    def test_self_match(self, client, alice):
        response = client.post("/matches", json={"user1_id": alice.id, "user2_id": alice.id}, headers=alice.headers)

        assert response.status_code == 400

    def test_missing_ids(self, client, alice):
        assert client.post("/matches", json={"user1_id": alice.id}, headers=alice.headers).status_code == 400
        assert client.post(
            "/matches", json={"user1_id": alice.id, "user2_id": "  "}, headers=alice.headers
        ).status_code == 400

    def test_unknown_user(self, client, alice):
        response = client.post("/matches", json={"user1_id": alice.id, "user2_id": "ghost"}, headers=alice.headers)

        assert response.status_code == 404

    def test_swipes_after_direct_match_do_not_duplicate(self, client, storage, alice, bob):
        client.post("/matches", json={"user1_id": alice.id, "user2_id": bob.id}, headers=alice.headers)
        swipe(client, alice, bob)
        swipe(client, bob, alice)

        assert len(match_rows(storage)) == 1


def test_three_users_pairwise(client, storage):
    users = [register(client, f"u{i}@x.com") for i in range(3)]
    for a in users:
        for b in users:
            if a is not b:
                swipe(client, a, b, "R")

    pairs = {(m.user1_id, m.user2_id) for m in match_rows(storage)}
    assert len(pairs) == 3
    assert all(lo < hi for lo, hi in pairs)
