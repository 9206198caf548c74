"""Pulumi entry point for the PostgreSQL infrastructure."""
import logging

import structlog

from postgres_infra.__main__ import PostgresStack
from postgres_infra.config import StackConfig

structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.INFO))
PostgresStack(config=StackConfig.load()).run()
