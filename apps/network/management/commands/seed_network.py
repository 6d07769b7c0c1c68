import logging
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.activities.models import Activity
from apps.network.models import Peer, SharedRepository
from apps.repositories.logic import create_repository
from apps.repositories.models import Collaborator, RepositoryTag, Tag
from apps.users.keys import generate_keypair

logger = logging.getLogger(__name__)
User = get_user_model()

DEMO_PASSWORD = 'password123'

USERS = [
    # username, display name, storage used
    ('alex', 'Alex Johnson', 1_200_000_000),
    ('ethan', 'Ethan Wright', 800_000_000),
    ('lisa', 'Lisa Chen', 500_000_000),
    ('sarah', 'Sarah Reynolds', 300_000_000),
]

REPOSITORIES = [
    # key, owner, fields, tags
    ('storage-client', 'alex', {
        'name': 'decentralized-storage-client',
        'description': 'Client library for connecting to decentralized storage networks',
        'is_public': True, 'is_verified': True, 'language': 'TypeScript',
        'stars': 24, 'forks': 8, 'branches': 3, 'commits': 128,
    }, ['p2p', 'typescript', 'decentralized']),
    ('explorer', 'alex', {
        'name': 'p2p-blockchain-explorer',
        'description': 'Decentralized blockchain explorer with peer-to-peer architecture',
        'is_public': True, 'is_verified': True, 'language': 'JavaScript',
        'stars': 42, 'forks': 15, 'branches': 5, 'commits': 216,
    }, ['p2p', 'blockchain', 'javascript', 'web3']),
    ('identity', 'alex', {
        'name': 'crypto-identity-manager',
        'description': 'Secure identity management using cryptographic signatures',
        'is_public': False, 'is_verified': False, 'language': 'Rust',
        'stars': 0, 'forks': 0, 'branches': 2, 'commits': 96,
    }, ['decentralized', 'rust']),
    ('git-protocol', 'ethan', {
        'name': 'decentralized-git-protocol',
        'description': 'Implementation of Git protocol over libp2p with cryptographic verification',
        'is_public': True, 'is_verified': True, 'language': 'Rust',
        'stars': 126, 'forks': 32, 'branches': 4, 'commits': 345,
    }, ['p2p', 'git', 'rust']),
    ('issue-tracker', 'sarah', {
        'name': 'p2p-issue-tracker',
        'description': 'Decentralized issue tracking system with offline-first capabilities',
        'is_public': True, 'is_verified': True, 'language': 'JavaScript',
        'stars': 89, 'forks': 15, 'branches': 3, 'commits': 178,
    }, ['p2p', 'javascript', 'issues', 'offline-first']),
]

COLLABORATORS = [
    ('storage-client', 'ethan', Collaborator.Permission.WRITE),
    ('storage-client', 'lisa', Collaborator.Permission.READ),
    ('identity', 'lisa', Collaborator.Permission.WRITE),
    ('git-protocol', 'alex', Collaborator.Permission.READ),
]

PEERS = [
    ('QmPeerid1', {'name': 'Peer 1', 'location': 'US'}),
    ('QmPeerid2', {'name': 'Peer 2', 'location': 'EU'}),
    ('QmPeerid3', {'name': 'Peer 3', 'location': 'AS'}),
]

SHARES = [
    ('storage-client', 'QmPeerid1'),
    ('storage-client', 'QmPeerid2'),
    ('explorer', 'QmPeerid1'),
    ('explorer', 'QmPeerid3'),
    ('git-protocol', 'QmPeerid2'),
    ('issue-tracker', 'QmPeerid3'),
]

ACTIVITIES = [
    # user, repository, type, payload, age
    ('alex', 'explorer', 'commit', {
        'commitHash': '8fb21a9e7d2c3de4a5b6c7d8e9f0a1b2c3d4e5f6',
        'message': 'Fix peer discovery in NAT environments',
    }, timedelta(hours=3)),
    ('alex', 'storage-client', 'commit', {
        'commitHash': '1a2b3c4d5e6f7a8b9c0d1e2f3a4b5c6d7e8f9a0b',
        'message': 'Add support for IPFS integration',
    }, timedelta(days=2)),
    ('ethan', 'storage-client', 'issue', {
        'action': 'opened',
        'title': 'Add support for encrypted content addressing',
    }, timedelta(days=1)),
    ('lisa', 'identity', 'pull_request', {
        'action': 'opened',
        'title': 'Implement multi-device key synchronization',
    }, timedelta(days=2)),
]


class Command(BaseCommand):
    help = 'Fills an empty database with demo users, repositories, tags, peers and activities.'

    def handle(self, *args, **options):
        if User.objects.exists():
            self.stdout.write(self.style.WARNING('Database already has users, skipping seed'))
            return

        self.stdout.write(self.style.SUCCESS('=== Seeding GitMesh demo data ==='))

        with transaction.atomic():
            self.stdout.write('1. Creating users...')
            users = {}
            for username, display_name, storage_used in USERS:
                public_key, private_key = generate_keypair()
                users[username] = User.objects.create_user(
                    username=username,
                    password=DEMO_PASSWORD,
                    display_name=display_name,
                    public_key=public_key,
                    private_key=private_key,
                    storage_used=storage_used,
                )

            self.stdout.write('2. Creating repositories and tags...')
            repositories = {}
            for key, owner, fields, tag_names in REPOSITORIES:
                repository = create_repository(users[owner], **fields)
                repositories[key] = repository
                for tag_name in tag_names:
                    tag, _ = Tag.objects.get_or_create(name=tag_name)
                    RepositoryTag.objects.get_or_create(repository=repository, tag=tag)

            self.stdout.write('3. Creating collaborators...')
            for key, username, permission in COLLABORATORS:
                Collaborator.objects.create(repository=repositories[key], user=users[username], permission=permission)

            self.stdout.write('4. Creating peers and shares...')
            peers = {peer_id: Peer.objects.create(peer_id=peer_id, metadata=metadata) for peer_id, metadata in PEERS}
            for key, peer_id in SHARES:
                SharedRepository.objects.create(repository=repositories[key], peer=peers[peer_id])

            self.stdout.write('5. Creating activities...')
            now = timezone.now()
            for username, key, activity_type, payload, age in ACTIVITIES:
                activity = Activity.objects.create(
                    user=users[username],
                    repository=repositories[key],
                    type=activity_type,
                    payload=payload,
                )
                # created_at is auto_now_add; backdate it explicitly.
                Activity.objects.filter(pk=activity.pk).update(created_at=now - age)

        logger.info("Seeded demo data")
        self.stdout.write(self.style.SUCCESS(f'=== Done. Log in as any of {", ".join(users)} with "{DEMO_PASSWORD}" ==='))
