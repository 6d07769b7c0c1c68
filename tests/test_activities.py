import pytest

from apps.activities.logic import parse_limit
from apps.activities.models import Activity

pytestmark = pytest.mark.django_db


def test_record_activity(client_for, owner, public_repository):
    response = client_for(owner).post('/api/activities', {
        'type': 'commit',
        'payload': {'message': 'Initial commit'},
        'repositoryId': public_repository.id,
    }, format='json')

    assert response.status_code == 201
    body = response.json()
    assert body['userId'] == owner.id
    assert body['repositoryId'] == public_repository.id
    assert body['repository']['name'] == 'mesh-core'
    assert body['payload'] == {'message': 'Initial commit'}


def test_record_activity_without_repository(client_for, owner):
    response = client_for(owner).post('/api/activities', {'type': 'login', 'payload': {}}, format='json')

    assert response.status_code == 201
    assert response.json()['repositoryId'] is None


def test_record_activity_requires_session(api_client):
    response = api_client.post('/api/activities', {'type': 'commit', 'payload': {}}, format='json')
    assert response.status_code == 401


@pytest.mark.parametrize('body', [
    {'payload': {}},
    {'type': 'commit'},
    {'type': 'commit', 'payload': {}, 'repositoryId': 424242},
])
def test_record_activity_validation(client_for, owner, body):
    response = client_for(owner).post('/api/activities', body, format='json')

    assert response.status_code == 400
    assert not Activity.objects.exists()


def test_cannot_record_activity_on_hidden_repository(client_for, other_user, private_repository):
    response = client_for(other_user).post('/api/activities', {
        'type': 'commit', 'payload': {}, 'repositoryId': private_repository.id,
    }, format='json')

    assert response.status_code == 403
    assert not Activity.objects.exists()


def test_user_feed_is_newest_first_and_limited(api_client, owner, public_repository):
    for number in range(12):
        Activity.objects.create(user=owner, repository=public_repository, type='commit', payload={'n': number})

    default = api_client.get(f'/api/activities/user/{owner.id}')
    limited = api_client.get(f'/api/activities/user/{owner.id}', {'limit': 3})

    assert len(default.json()) == 10
    assert [entry['payload']['n'] for entry in limited.json()] == [11, 10, 9]


def test_user_feed_hides_private_repository_activity_from_others(api_client, client_for, owner, public_repository, private_repository):
    Activity.objects.create(user=owner, repository=public_repository, type='commit', payload={})
    Activity.objects.create(user=owner, repository=private_repository, type='commit', payload={})
    Activity.objects.create(user=owner, type='star', payload={})

    assert len(api_client.get(f'/api/activities/user/{owner.id}').json()) == 2
    assert len(client_for(owner).get(f'/api/activities/user/{owner.id}').json()) == 3


def test_repository_feed(api_client, owner, other_user, public_repository):
    Activity.objects.create(user=other_user, repository=public_repository, type='issue', payload={'title': 'Bug'})
    Activity.objects.create(user=owner, type='star', payload={})

    response = api_client.get(f'/api/activities/repository/{public_repository.id}')

    assert response.status_code == 200
    assert [entry['type'] for entry in response.json()] == ['issue']


def test_repository_feed_of_private_repository(api_client, client_for, owner, private_repository):
    Activity.objects.create(user=owner, repository=private_repository, type='commit', payload={})

    assert api_client.get(f'/api/activities/repository/{private_repository.id}').status_code == 403
    assert len(client_for(owner).get(f'/api/activities/repository/{private_repository.id}').json()) == 1


@pytest.mark.parametrize('raw, expected', [
    (None, 10),
    ('5', 5),
    ('abc', 10),
    ('0', 1),
    ('1000', 100),
])
def test_parse_limit(raw, expected):
    assert parse_limit(raw) == expected
