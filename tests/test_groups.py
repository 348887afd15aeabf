"""
Groups, memberships and the admin/member role rules.
"""
import pytest

from apps.groups import services
from apps.groups.models import Group, GroupMember
from common.exceptions import ForbiddenError, NotFoundError, ValidationError

pytestmark = pytest.mark.django_db


@pytest.fixture
def group(alice, caller_for):
    """A group created by alice, who is therefore its only admin."""
    return services.create_group(caller_for(alice), 'Book club', 'Monthly reads')


@pytest.fixture
def membership(group, bob):
    """bob joins alice's group as a plain member."""
    return GroupMember.objects.create(group=group, user=bob, role=GroupMember.Role.MEMBER)


def _url(group, *parts):
    return '/'.join(['/api/v1/groups', str(group.id), *map(str, parts)])


class TestCreateAndRead:

    def test_creator_becomes_sole_admin(self, client_for, alice):
        response = client_for(alice).post('/api/v1/groups', {'name': 'Hikers'})

        assert response.status_code == 201
        data = response.data['data']
        assert data['name'] == 'Hikers'
        assert data['description'] is None
        assert data['created_by'] == alice.id
        rows = GroupMember.objects.filter(group_id=data['id'])
        assert [(row.user_id, row.role) for row in rows] == [(alice.id, 'admin')]

    def test_missing_name_is_rejected(self, client_for, alice):
        response = client_for(alice).post('/api/v1/groups', {'description': 'no name'})

        assert response.status_code == 400
        assert not Group.objects.exists()

    def test_service_rejects_empty_name(self, caller_for, alice):
        with pytest.raises(ValidationError):
            services.create_group(caller_for(alice), '')

    def test_list_only_shows_own_groups(self, client_for, caller_for, alice, bob, group):
        services.create_group(caller_for(bob), 'Bob only')

        response = client_for(alice).get('/api/v1/groups')

        assert [row['name'] for row in response.data['data']] == ['Book club']

    def test_member_can_read_group(self, client_for, bob, group, membership):
        response = client_for(bob).get(_url(group))

        assert response.status_code == 200
        assert response.data['data']['id'] == group.id

    def test_non_member_cannot_read_group(self, client_for, carol, group):
        response = client_for(carol).get(_url(group))

        assert response.status_code == 403
        assert response.data['error']['code'] == 'permission_denied'

    def test_missing_group_reads_as_forbidden(self, client_for, carol):
        response = client_for(carol).get('/api/v1/groups/9999')

        assert response.status_code == 403

    def test_members_listing(self, client_for, alice, bob, group, membership):
        response = client_for(bob).get(_url(group, 'members'))

        assert response.status_code == 200
        by_name = {row['username']: row for row in response.data['data']}
        assert by_name['alice']['role'] == 'admin'
        assert by_name['bob']['role'] == 'member'
        assert by_name['bob']['id'] == bob.id
        assert by_name['bob']['email'] == 'bob@example.com'

    def test_members_listing_requires_membership(self, client_for, carol, group):
        assert client_for(carol).get(_url(group, 'members')).status_code == 403


class TestUpdateGroup:

    def test_admin_can_update(self, client_for, alice, group):
        response = client_for(alice).put(_url(group), {'name': 'Reading circle'})

        assert response.status_code == 200
        group.refresh_from_db()
        assert group.name == 'Reading circle'
        assert group.description is None

    def test_member_cannot_update(self, client_for, bob, group, membership):
        response = client_for(bob).put(_url(group), {'name': 'Hijacked'})

        assert response.status_code == 403
        group.refresh_from_db()
        assert group.name == 'Book club'

    def test_service_checks_role_before_name(self, caller_for, bob, group, membership):
        with pytest.raises(ForbiddenError):
            services.update_group(caller_for(bob), group.id, '')

    def test_member_with_empty_body_is_forbidden(self, client_for, bob, group, membership):
        response = client_for(bob).put(_url(group), {})

        assert response.status_code == 403
        assert response.data['error']['message'] == 'You do not have permission to update this group.'

    def test_admin_with_empty_body_is_rejected(self, client_for, alice, group):
        response = client_for(alice).put(_url(group), {})

        assert response.status_code == 400
        assert 'name' in response.data['error']['details']

    def test_outsider_update_of_missing_group_is_forbidden(self, client_for, carol):
        response = client_for(carol).put('/api/v1/groups/9999', {'name': 'Ghost'})

        assert response.status_code == 403


class TestDeleteGroup:

    def test_creator_can_delete_and_memberships_cascade(self, client_for, alice, group, membership):
        response = client_for(alice).delete(_url(group))

        assert response.status_code == 200
        assert not Group.objects.filter(pk=group.pk).exists()
        assert not GroupMember.objects.filter(group_id=group.pk).exists()

    def test_promoted_admin_cannot_delete(self, client_for, bob, group, membership):
        membership.role = GroupMember.Role.ADMIN
        membership.save()

        response = client_for(bob).delete(_url(group))

        assert response.status_code == 403
        assert Group.objects.filter(pk=group.pk).exists()

    def test_creator_can_delete_after_demotion(self, caller_for, alice, group):
        GroupMember.objects.filter(group=group, user=alice).update(role=GroupMember.Role.MEMBER)

        services.delete_group(caller_for(alice), group.id)

        assert not Group.objects.filter(pk=group.pk).exists()


class TestAddMember:

    def test_admin_adds_member_with_default_role(self, client_for, alice, carol, group):
        response = client_for(alice).post(_url(group, 'members'), {'user_id': carol.id})

        assert response.status_code == 201
        assert response.data['data']['role'] == 'member'
        assert GroupMember.objects.get(group=group, user=carol).role == 'member'

    def test_admin_adds_admin(self, client_for, alice, carol, group):
        response = client_for(alice).post(
            _url(group, 'members'), {'user_id': carol.id, 'role': 'admin'},
        )

        assert response.status_code == 201
        assert services.is_admin_member(carol.id, group.id)

    def test_member_with_empty_body_cannot_add(self, client_for, bob, group, membership):
        response = client_for(bob).post(_url(group, 'members'), {})

        assert response.status_code == 403

    def test_member_cannot_add(self, client_for, bob, carol, group, membership):
        response = client_for(bob).post(_url(group, 'members'), {'user_id': carol.id})

        assert response.status_code == 403
        assert not services.is_member(carol.id, group.id)

    def test_unknown_user_is_not_found(self, client_for, alice, group):
        response = client_for(alice).post(_url(group, 'members'), {'user_id': 9999})

        assert response.status_code == 404
        assert response.data['error']['message'] == 'User not found.'

    def test_existing_member_conflicts(self, client_for, alice, bob, group, membership):
        response = client_for(alice).post(_url(group, 'members'), {'user_id': bob.id})

        assert response.status_code == 409
        assert GroupMember.objects.filter(group=group, user=bob).count() == 1

    def test_invalid_role_is_rejected(self, client_for, alice, carol, group):
        response = client_for(alice).post(
            _url(group, 'members'), {'user_id': carol.id, 'role': 'owner'},
        )

        assert response.status_code == 400

    def test_service_reports_missing_user(self, caller_for, alice, group):
        with pytest.raises(NotFoundError):
            services.add_member(caller_for(alice), group.id, 9999)


class TestRemoveMember:

    def test_member_can_leave(self, client_for, bob, group, membership):
        response = client_for(bob).delete(_url(group, 'members', bob.id))

        assert response.status_code == 200
        assert not services.is_member(bob.id, group.id)

    def test_member_cannot_remove_others(self, client_for, alice, bob, group, membership):
        response = client_for(bob).delete(_url(group, 'members', alice.id))

        assert response.status_code == 403
        assert services.is_member(alice.id, group.id)

    def test_admin_removes_member(self, client_for, alice, bob, group, membership):
        response = client_for(alice).delete(_url(group, 'members', bob.id))

        assert response.status_code == 200
        assert not services.is_member(bob.id, group.id)

    def test_removing_absent_user_succeeds(self, client_for, alice, carol, group):
        response = client_for(alice).delete(_url(group, 'members', carol.id))

        assert response.status_code == 200

    def test_last_admin_may_leave(self, caller_for, alice, group):
        services.remove_member(caller_for(alice), group.id, alice.id)

        assert not GroupMember.objects.filter(group=group).exists()
        assert Group.objects.filter(pk=group.pk).exists()


class TestUpdateRole:

    def test_admin_promotes_member(self, client_for, alice, bob, group, membership):
        response = client_for(alice).put(_url(group, 'members', bob.id), {'role': 'admin'})

        assert response.status_code == 200
        membership.refresh_from_db()
        assert membership.role == 'admin'

    def test_member_cannot_change_roles(self, client_for, alice, bob, group, membership):
        response = client_for(bob).put(_url(group, 'members', bob.id), {'role': 'admin'})

        assert response.status_code == 403
        membership.refresh_from_db()
        assert membership.role == 'member'

    def test_missing_role_is_rejected(self, client_for, alice, bob, group, membership):
        response = client_for(alice).put(_url(group, 'members', bob.id), {})

        assert response.status_code == 400

    def test_non_member_target_is_a_no_op(self, client_for, caller_for, alice, carol, group):
        response = client_for(alice).put(_url(group, 'members', carol.id), {'role': 'admin'})

        assert response.status_code == 200
        assert not services.is_member(carol.id, group.id)
        assert services.update_member_role(caller_for(alice), group.id, carol.id, 'admin') == 0

    def test_service_requires_role_first(self, caller_for, carol, group):
        with pytest.raises(ValidationError):
            services.update_member_role(caller_for(carol), group.id, carol.id, '')
