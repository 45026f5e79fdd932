import os

from redis_record.conf import CONFIG_YAML_ENV_VAR, UNITTESTS_SETTINGS_FILEPATH

os.environ[CONFIG_YAML_ENV_VAR] = os.environ.get('REDIS_RECORD_TEST_CONFIG_YAML', UNITTESTS_SETTINGS_FILEPATH)
