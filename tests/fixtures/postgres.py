import logging

import funcdb as db
import pytest
from funcdb.testing import run_scripts, sql_scripts

from tests.fixtures.sqlite import MIGRATIONS

logger = logging.getLogger(__name__)


@pytest.fixture(scope='session')
def psql_docker(request):
    """Session-scoped PostgreSQL container using testcontainers.

    Skips the requesting tests when no Docker daemon is reachable.
    """
    postgres = pytest.importorskip('testcontainers.postgres')

    try:
        container = postgres.PostgresContainer(
            image='postgres:16',
            username='postgres',
            password='postgres',
            dbname='test_db',
        )
        container.start()
    except Exception as e:
        pytest.skip(f'PostgreSQL container unavailable: {e}')

    def finalizer():
        try:
            container.stop()
            logger.info('PostgreSQL container stopped')
        except Exception as e:
            logger.warning(f'Error stopping container: {e}')

    request.addfinalizer(finalizer)

    options = db.DatabaseOptions(
        drivername='postgresql',
        hostname=container.get_container_host_ip(),
        port=int(container.get_exposed_port(5432)),
        username='postgres',
        password='postgres',
        database='test_db',
        timeout=30,
    )
    logger.info(f'PostgreSQL container started at {options.hostname}:{options.port}')
    return options


@pytest.fixture
def psql_conn(psql_docker):
    """PostgreSQL connection with the WORDS migrations applied"""
    cn = db.connect(psql_docker)
    db.update(cn, 'DROP TABLE IF EXISTS WORDS')
    run_scripts(cn, sql_scripts(MIGRATIONS))

    yield cn

    db.update(cn, 'DROP TABLE IF EXISTS WORDS')
    cn.close()
