"""
User directory tests
"""
import pytest

from herohub.core.exceptions import BadRequestError, NotFoundError
from herohub.models import Follow, Like, RecentActivity
from herohub.schemas.user import UpdateProfile, UserRegister
from herohub.services.aggregation_service import AggregationService
from herohub.services.engagement_recorder import EngagementRecorder
from herohub.services.user_service import UserDirectory


def test_register_and_lookup(db):
    user = UserDirectory.register(db, UserRegister(username="diana", first_name="Diana"))
    
    assert user.user_id is not None
    assert user.active is True
    assert UserDirectory.get(db, user.user_id).username == "diana"
    assert UserDirectory.get_by_username(db, "diana").user_id == user.user_id


def test_register_duplicate_username(db, alice):
    with pytest.raises(BadRequestError):
        UserDirectory.register(db, UserRegister(username="alice"))


def test_partial_update_changes_only_given_fields(db, alice):
    user = UserDirectory.update(db, alice.user_id, UpdateProfile(bio="Curious", location="Oxford"))
    
    assert user.bio == "Curious"
    assert user.location == "Oxford"
    assert user.first_name == "Alice"
    assert user.last_updated_dt is not None


def test_update_missing_user(db):
    with pytest.raises(NotFoundError):
        UserDirectory.update(db, 77, UpdateProfile(bio="x"))


def test_remove(db, alice):
    UserDirectory.remove(db, alice.user_id)
    
    with pytest.raises(NotFoundError):
        UserDirectory.get_by_username(db, "alice")


def test_remove_cascades_into_counts(db, alice, bob):
    EngagementRecorder.record(db, "follow", alice.user_id, "alice", 7, "Hero 7")
    EngagementRecorder.record(db, "like", alice.user_id, "alice", 7, "Hero 7")
    EngagementRecorder.record(db, "follow", bob.user_id, "bob", 8, "Hero 8")
    
    UserDirectory.remove(db, alice.user_id)
    
    assert db.query(Follow).count() == 1
    assert db.query(Like).count() == 0
    assert db.query(RecentActivity).filter(RecentActivity.user_id == alice.user_id).count() == 0
    assert [rank.superhero_id for rank in AggregationService.leaderboard(db)] == [8]
    
    view = AggregationService.view_for(db, bob.user_id)
    assert view.hero_follow_counts == {8: 1}
    assert view.hero_like_counts == {}


def test_list_all_ordered_by_username(db, make_user):
    for username in ("zed", "amy", "mike"):
        make_user(username)
    
    assert [user.username for user in UserDirectory.list_all(db)] == ["amy", "mike", "zed"]


def test_list_all_empty(db):
    assert UserDirectory.list_all(db) == []
