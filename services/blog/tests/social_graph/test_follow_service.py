from types import SimpleNamespace

import pytest

from app.auth.service import register_user
from app.exceptions import CannotFollowSelf
from app.social_graph.models import Follow
from app.social_graph import service as svc
from shared.database.upsert import delete_if_present, insert_if_absent


async def _users(session):
    a = await register_user(session, name="A", email="a@example.com", password="secret123")
    b = await register_user(session, name="B", email="b@example.com", password="secret123")
    return a, b


async def test_toggle_twice_restores_state(db_session) -> None:
    a, b = await _users(db_session)

    assert await svc.toggle_follow(db_session, a.id, b.id) is True
    assert await svc.is_following(db_session, a.id, b.id)
    assert await svc.get_follower_ids(db_session, b.id) == [a.id]

    assert await svc.toggle_follow(db_session, a.id, b.id) is False
    assert not await svc.is_following(db_session, a.id, b.id)
    assert await svc.get_follower_ids(db_session, b.id) == []
    assert await svc.get_following_ids(db_session, a.id) == []


async def test_projections_always_mirror(db_session) -> None:
    a, b = await _users(db_session)
    await svc.toggle_follow(db_session, a.id, b.id)
    await svc.toggle_follow(db_session, b.id, a.id)

    for x, y in ((a, b), (b, a)):
        following = await svc.get_following_ids(db_session, x.id)
        followers = await svc.get_follower_ids(db_session, y.id)
        assert (y.id in following) == (x.id in followers)


async def test_self_follow_rejected(db_session) -> None:
    a, _ = await _users(db_session)
    with pytest.raises(CannotFollowSelf):
        await svc.toggle_follow(db_session, a.id, a.id)


async def test_insert_if_absent_never_duplicates(db_session) -> None:
    a, b = await _users(db_session)
    assert await insert_if_absent(db_session, Follow, follower_id=a.id, following_id=b.id) is True
    assert await insert_if_absent(db_session, Follow, follower_id=a.id, following_id=b.id) is False
    assert await svc.count_followers_by_user(db_session, [b.id]) == {b.id: 1}

    assert await delete_if_present(db_session, Follow, follower_id=a.id, following_id=b.id) is True
    assert await delete_if_present(db_session, Follow, follower_id=a.id, following_id=b.id) is False


async def test_remove_all_edges(db_session) -> None:
    a, b = await _users(db_session)
    await svc.toggle_follow(db_session, a.id, b.id)
    await svc.toggle_follow(db_session, b.id, a.id)

    assert await svc.remove_all_edges(db_session, a.id) == 2
    assert await svc.get_followers(db_session, b.id) == []
    assert await svc.get_following(db_session, b.id) == []


async def test_insert_if_absent_rejects_unknown_dialect() -> None:
    session = SimpleNamespace(bind=SimpleNamespace(dialect=SimpleNamespace(name="mysql")))
    with pytest.raises(ValueError, match="mysql"):
        await insert_if_absent(session, Follow, follower_id=None, following_id=None)
