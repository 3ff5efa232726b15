import argparse
import asyncio
import json

from src.ngo_registry.logic.integrity import check_integrity
from src.ngo_registry.schemas.zone import ZoneListIn
from src.ngo_registry.utils.database import Base, engine
from src.ngo_registry.models.ngo import NgoInfo, InterventionZone  # noqa: F401  (register tables)


async def init_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()


def validate_file(path, mode):
    with open(path, encoding='utf-8') as fh:
        payload = json.load(fh)
    if isinstance(payload, list):
        payload = {'zones': payload}
    zones = ZoneListIn.model_validate(payload).zones
    warnings = check_integrity(zones, mode=mode)
    print(f'{len(zones)} zone(s), {len(warnings)} unresolved parent(s)')
    for w in warnings:
        print(f'  - {w}')


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--init-db', action='store_true', help='create missing tables')
    parser.add_argument('--validate', metavar='FILE', help='check a JSON zone list before import')
    parser.add_argument('--mode', choices=['lenient', 'strict'])
    args = parser.parse_args()
    if args.init_db:
        asyncio.run(init_db())
        print('Tables created')
    if args.validate:
        validate_file(args.validate, args.mode)

if __name__ == '__main__':
    main()
