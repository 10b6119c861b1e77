"""
Service context extraction for distributed logging.

Identifies the running process in log lines so entries from several
replicas can be told apart.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'farm-visit-service')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Container hostname is the pod/task id under orchestration
    instance_id = os.getenv('HOSTNAME', '')
    if instance_id:
        instance_id = instance_id[:12]
    else:
        instance_id = str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance_id}'
