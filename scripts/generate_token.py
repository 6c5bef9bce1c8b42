"""Mint a client token for an existing session using the OPENTOK_* settings."""
import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from tokbox_server.exceptions import OpenTokError  # noqa: E402
from tokbox_server.models.token_model import Role, TokenFormat, TokenOptions  # noqa: E402
from tokbox_server.services.opentok_client import OpenTokClient  # noqa: E402
from tokbox_server.utils.time_utils import epoch_seconds  # noqa: E402

parser = argparse.ArgumentParser()
parser.add_argument('--session-id', required=True)
parser.add_argument('--role', default=Role.PUBLISHER.value, choices=[role.value for role in Role])
parser.add_argument('--expire-in', type=int, default=0, help='seconds from now; 0 keeps the 24h default')
parser.add_argument('--data', default=None)
parser.add_argument('--format', dest='token_format', default=None, choices=[fmt.value for fmt in TokenFormat])
args = parser.parse_args()

client = OpenTokClient.from_settings()
options = TokenOptions(
    role=args.role,
    expire_time=epoch_seconds() + args.expire_in if args.expire_in else 0,
    data=args.data,
)
try:
    print(client.generate_token(args.session_id, options, token_format=args.token_format))
except OpenTokError as exc:
    parser.exit(1, f'error: {exc}\n')
finally:
    client.close()
