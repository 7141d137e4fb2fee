"""Unit tests for RecommendationApplicationService (fake repo, in-memory cache)."""

import uuid
from dataclasses import replace
from typing import Any
from unittest.mock import AsyncMock

import pytest

from src.pl_cache.facade import CacheFacade
from src.pl_common.enums import RecommendationBox
from src.pl_common.errors import (
    PropertyNotFoundError,
    RecommendationNotFoundError,
    SelfRecommendationError,
    UserNotFoundError,
)
from src.pl_gateway.user.db_models import UserModel
from src.pl_property.domain.models import Property, UserSummary
from src.pl_recommendation.application.schemas import RecommendRequest
from src.pl_recommendation.application.service import RecommendationApplicationService
from src.pl_recommendation.domain.models import Recommendation
from tests.factories import T0, InMemoryRedis, make_property, make_user


class FakeRecommendationRepo:
    def __init__(self, properties: list[Property], users: list[UserModel]) -> None:
        self.properties = {p.id: p for p in properties}
        self.users = {u.id: u for u in users}
        self.rows: dict[uuid.UUID, Recommendation] = {}
        self.list_calls = 0

    async def property_exists(self, db: Any, property_id: uuid.UUID) -> bool:
        return property_id in self.properties

    async def create(
        self,
        db: Any,
        sender_id: uuid.UUID,
        recipient_id: uuid.UUID,
        property_id: uuid.UUID,
        message: str | None,
    ) -> Recommendation:
        rec = Recommendation(
            id=uuid.uuid4(),
            sender_id=sender_id,
            recipient_id=recipient_id,
            property_id=property_id,
            message=message,
            is_read=False,
            created_at=T0,
            updated_at=T0,
        )
        self.rows[rec.id] = rec
        return rec

    def _summary(self, user_id: uuid.UUID) -> UserSummary:
        u = self.users[user_id]
        return UserSummary(id=u.id, name=u.name, email=u.email)

    async def list_for_user(
        self, db: Any, user_id: uuid.UUID, box: RecommendationBox, skip: int, limit: int
    ) -> list[Recommendation]:
        self.list_calls += 1
        found = []
        for r in self.rows.values():
            owner = r.recipient_id if box is RecommendationBox.RECEIVED else r.sender_id
            if owner != user_id:
                continue
            populated = replace(r, property=self.properties[r.property_id])
            if box is RecommendationBox.RECEIVED:
                populated.sender = self._summary(r.sender_id)
            else:
                populated.recipient = self._summary(r.recipient_id)
            found.append(populated)
        return found[skip : skip + limit]

    async def count_for_user(self, db: Any, user_id: uuid.UUID, box: RecommendationBox) -> int:
        key = "recipient_id" if box is RecommendationBox.RECEIVED else "sender_id"
        return sum(1 for r in self.rows.values() if getattr(r, key) == user_id)

    async def mark_read(
        self, db: Any, recommendation_id: uuid.UUID, recipient_id: uuid.UUID
    ) -> Recommendation | None:
        rec = self.rows.get(recommendation_id)
        if rec is None or rec.recipient_id != recipient_id:
            return None
        rec.is_read = True
        return rec

    async def delete_for_participant(
        self, db: Any, recommendation_id: uuid.UUID, user_id: uuid.UUID
    ) -> Recommendation | None:
        rec = self.rows.get(recommendation_id)
        if rec is None or not rec.involves(user_id):
            return None
        return self.rows.pop(recommendation_id)


class FakeUsers:
    def __init__(self, users: list[UserModel]) -> None:
        self.by_email = {u.email: u for u in users}

    async def find_by_email(self, email: str, db: Any) -> UserModel | None:
        return self.by_email.get(email.strip().lower())


ALICE = make_user("Alice", "alice@example.com")
BOB = make_user("Bob", "bob@example.com")


@pytest.fixture
def prop() -> Property:
    return make_property()


@pytest.fixture
def repo(prop: Property) -> FakeRecommendationRepo:
    return FakeRecommendationRepo([prop], [ALICE, BOB])


@pytest.fixture
def service(cache: CacheFacade, repo: FakeRecommendationRepo) -> RecommendationApplicationService:
    return RecommendationApplicationService(
        cache, repo=repo, users=FakeUsers([ALICE, BOB])  # type: ignore[arg-type]
    )


def _req(prop: Property, email: str = "bob@example.com") -> RecommendRequest:
    return RecommendRequest(property_id=prop.id, recipient_email=email, message="  Look!  ")


class TestRecommend:
    async def test_shows_up_in_both_boxes(
        self, service: RecommendationApplicationService, prop: Property
    ) -> None:
        db = AsyncMock()
        out = await service.recommend(db, ALICE.id, _req(prop))
        assert out.message == "Look!"
        assert out.is_read is False

        received = await service.list_recommendations(db, BOB.id, RecommendationBox.RECEIVED, 1, 10)
        sent = await service.list_recommendations(db, ALICE.id, RecommendationBox.SENT, 1, 10)

        assert [r["id"] for r in received["items"]] == [out.id]
        assert received["items"][0]["sender"]["name"] == "Alice"
        assert received["items"][0]["property"]["id"] == str(prop.id)
        assert [r["id"] for r in sent["items"]] == [out.id]
        assert sent["items"][0]["recipient"]["email"] == "bob@example.com"

    async def test_self_recommendation_rejected(
        self, service: RecommendationApplicationService, prop: Property
    ) -> None:
        db = AsyncMock()
        with pytest.raises(SelfRecommendationError) as exc_info:
            await service.recommend(db, ALICE.id, _req(prop, "ALICE@example.com"))
        assert exc_info.value.http_status == 422
        db.commit.assert_not_awaited()

    async def test_unknown_recipient(
        self, service: RecommendationApplicationService, prop: Property
    ) -> None:
        with pytest.raises(UserNotFoundError):
            await service.recommend(AsyncMock(), ALICE.id, _req(prop, "nobody@example.com"))

    async def test_unknown_property(self, service: RecommendationApplicationService) -> None:
        with pytest.raises(PropertyNotFoundError):
            await service.recommend(AsyncMock(), ALICE.id, _req(make_property()))

    async def test_invalidates_both_participants(
        self,
        service: RecommendationApplicationService,
        prop: Property,
        fake_redis: InMemoryRedis,
    ) -> None:
        fake_redis.store.update({
            f"recommendations:{ALICE.id}:sent:1:10": "a",
            f"recommendations:{BOB.id}:received:1:10": "b",
            "properties:{}:{}:1:10": "c",
        })
        await service.recommend(AsyncMock(), ALICE.id, _req(prop))
        assert list(fake_redis.store) == ["properties:{}:{}:1:10"]


class TestListRecommendations:
    async def test_cached_until_next_write(
        self,
        service: RecommendationApplicationService,
        repo: FakeRecommendationRepo,
        prop: Property,
    ) -> None:
        db = AsyncMock()
        await service.list_recommendations(db, BOB.id, RecommendationBox.RECEIVED, 1, 10)
        await service.list_recommendations(db, BOB.id, RecommendationBox.RECEIVED, 1, 10)
        assert repo.list_calls == 1

        await service.recommend(db, ALICE.id, _req(prop))
        page = await service.list_recommendations(db, BOB.id, RecommendationBox.RECEIVED, 1, 10)
        assert page["pagination"]["total"] == 1
        assert repo.list_calls == 2


class TestMarkReadAndDelete:
    async def test_mark_read_by_recipient_is_idempotent(
        self, service: RecommendationApplicationService, prop: Property
    ) -> None:
        db = AsyncMock()
        out = await service.recommend(db, ALICE.id, _req(prop))
        rec_id = uuid.UUID(out.id)

        assert (await service.mark_read(db, rec_id, BOB.id)).is_read is True
        assert (await service.mark_read(db, rec_id, BOB.id)).is_read is True

    async def test_mark_read_by_sender_not_found(
        self, service: RecommendationApplicationService, prop: Property
    ) -> None:
        out = await service.recommend(AsyncMock(), ALICE.id, _req(prop))
        with pytest.raises(RecommendationNotFoundError):
            await service.mark_read(AsyncMock(), uuid.UUID(out.id), ALICE.id)

    async def test_delete_by_either_participant(
        self,
        service: RecommendationApplicationService,
        repo: FakeRecommendationRepo,
        prop: Property,
    ) -> None:
        db = AsyncMock()
        first = await service.recommend(db, ALICE.id, _req(prop))
        second = await service.recommend(db, ALICE.id, _req(prop))

        await service.delete(db, uuid.UUID(first.id), ALICE.id)
        await service.delete(db, uuid.UUID(second.id), BOB.id)
        assert repo.rows == {}

    async def test_delete_by_outsider_not_found(
        self, service: RecommendationApplicationService, prop: Property
    ) -> None:
        out = await service.recommend(AsyncMock(), ALICE.id, _req(prop))
        with pytest.raises(RecommendationNotFoundError):
            await service.delete(AsyncMock(), uuid.UUID(out.id), uuid.uuid4())
