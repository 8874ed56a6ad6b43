import os
import tempfile
import unittest

import yaml

from modelretriever.config import (
    ConfigRegistry, FileConfigProvider, MappingConfigProvider, RetrieverSettings,
    SchemaValidator, RETRIEVER_DOMAIN, get_config_registry, get_retriever_settings,
    validate_retriever_settings
)
from modelretriever.config.core import merge_settings
from modelretriever.core.enums import BuildLockMode
from modelretriever.core.exceptions import ConfigurationError
from modelretriever.events import CACHE_INVALIDATION_TOPIC


class TestRetrieverSettings(unittest.TestCase):

    def test_defaults(self):
        settings = RetrieverSettings()

        self.assertEqual(settings.max_hierarchy_depth, 50)
        self.assertIs(settings.build_lock_mode, BuildLockMode.PER_TYPE)
        self.assertTrue(settings.log_unmatched_paths)
        self.assertEqual(settings.invalidation_topic, CACHE_INVALIDATION_TOPIC)
        self.assertEqual(settings.logging.level, "INFO")

    def test_round_trip_through_dict(self):
        settings = RetrieverSettings.from_dict({
            'max_hierarchy_depth': 5,
            'build_lock_mode': 'global',
            'logging': {'json_logs': True}
        })

        self.assertEqual(settings.max_hierarchy_depth, 5)
        self.assertIs(settings.build_lock_mode, BuildLockMode.GLOBAL)
        self.assertTrue(settings.logging.json_logs)
        self.assertEqual(settings.logging.level, "INFO")
        self.assertEqual(RetrieverSettings.from_dict(settings.to_dict()), settings)

    def test_validation(self):
        self.assertTrue(validate_retriever_settings(RetrieverSettings().to_dict()).is_valid)

        result = validate_retriever_settings({
            'max_hierarchy_depth': 0,
            'build_lock_mode': 'sometimes',
            'logging': {'level': 'LOUD'},
            'unknown_key': 1
        })
        self.assertFalse(result.is_valid)
        self.assertEqual(len(result.errors), 4)

        result = validate_retriever_settings({'max_hierarchy_depth': True, 'invalidation_topic': ''})
        self.assertEqual(len(result.errors), 2)

    def test_schema_validator_nested_type_error(self):
        validator = SchemaValidator('retriever', {'logging': {'level': str}})

        result = validator.validate({'logging': 'INFO'})

        self.assertFalse(result)
        self.assertIn("must be a dictionary", result.messages[0])


class TestConfigProviders(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.config_dir = self.tmp_dir.name
        self.config_file = os.path.join(self.config_dir, "retriever.yaml")

    def tearDown(self):
        self.tmp_dir.cleanup()

    def _write(self, content):
        with open(self.config_file, 'w') as f:
            f.write(content)

    def test_file_provider_reads_yaml(self):
        self._write(yaml.dump({'max_hierarchy_depth': 7}))

        provider = FileConfigProvider(RETRIEVER_DOMAIN, self.config_dir)

        self.assertEqual(provider.load(), {'max_hierarchy_depth': 7})
        self.assertEqual(provider.describe(), self.config_file)

    def test_file_provider_missing_or_empty_file(self):
        provider = FileConfigProvider(RETRIEVER_DOMAIN, self.config_dir)
        self.assertEqual(provider.load(), {})

        self._write("")
        self.assertEqual(provider.load(), {})

    def test_file_provider_reloads_on_change(self):
        self._write("max_hierarchy_depth: 7\n")
        provider = FileConfigProvider(RETRIEVER_DOMAIN, self.config_dir)
        self.assertEqual(provider.load()['max_hierarchy_depth'], 7)
        mtime_ns = os.stat(self.config_file).st_mtime_ns

        # same modification time, different size
        self._write("max_hierarchy_depth: 12\n")
        os.utime(self.config_file, ns=(mtime_ns, mtime_ns))
        self.assertEqual(provider.load()['max_hierarchy_depth'], 12)

        os.remove(self.config_file)
        self.assertEqual(provider.load(), {})

    def test_file_provider_returns_copies(self):
        self._write("logging:\n  level: DEBUG\n")
        provider = FileConfigProvider(RETRIEVER_DOMAIN, self.config_dir)

        provider.load()['logging']['level'] = "ERROR"

        self.assertEqual(provider.load()['logging']['level'], "DEBUG")

    def test_file_provider_invalid_yaml(self):
        self._write("max_hierarchy_depth: [1,")
        provider = FileConfigProvider(RETRIEVER_DOMAIN, self.config_dir)

        with self.assertRaises(ConfigurationError):
            provider.load()

    def test_file_provider_rejects_non_mapping(self):
        self._write("- just\n- a list\n")
        provider = FileConfigProvider(RETRIEVER_DOMAIN, self.config_dir)

        with self.assertRaises(ConfigurationError):
            provider.load()

    def test_mapping_provider_returns_copies(self):
        source = {'max_hierarchy_depth': 3, 'logging': {'level': "DEBUG"}}
        provider = MappingConfigProvider(RETRIEVER_DOMAIN, source)
        source['max_hierarchy_depth'] = 99

        provider.load()['logging']['level'] = "ERROR"

        self.assertEqual(provider.load(), {'max_hierarchy_depth': 3, 'logging': {'level': "DEBUG"}})


class TestConfigRegistry(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.registry = get_config_registry(self.tmp_dir.name)

    def tearDown(self):
        self.tmp_dir.cleanup()

    def test_retriever_domain_read_from_file_by_default(self):
        provider = self.registry.get_provider(RETRIEVER_DOMAIN)

        self.assertIsInstance(provider, FileConfigProvider)
        self.assertIsNotNone(self.registry.validator_of(RETRIEVER_DOMAIN))
        self.assertEqual(self.registry.list_domains(), [RETRIEVER_DOMAIN])

    def test_settings_loaded_from_file(self):
        with open(os.path.join(self.tmp_dir.name, "retriever.yaml"), 'w') as f:
            yaml.dump({'max_hierarchy_depth': 4, 'build_lock_mode': 'global'}, f)

        settings = get_retriever_settings(self.registry)

        self.assertEqual(settings.max_hierarchy_depth, 4)
        self.assertIs(settings.build_lock_mode, BuildLockMode.GLOBAL)

    def test_missing_file_gives_defaults(self):
        self.assertEqual(get_retriever_settings(self.registry), RetrieverSettings())

    def test_overrides_merged_over_stored_settings(self):
        self.registry.register_domain(RETRIEVER_DOMAIN, MappingConfigProvider(
            RETRIEVER_DOMAIN, {'max_hierarchy_depth': 4, 'logging': {'level': "DEBUG"}}
        ))

        settings = get_retriever_settings(self.registry, {'logging': {'json_logs': True}})

        self.assertEqual(settings.max_hierarchy_depth, 4)
        self.assertEqual(settings.logging.level, "DEBUG")
        self.assertTrue(settings.logging.json_logs)

    def test_registering_provider_keeps_validator(self):
        self.registry.register_domain(
            RETRIEVER_DOMAIN, MappingConfigProvider(RETRIEVER_DOMAIN, {'build_lock_mode': 'never'})
        )

        with self.assertRaises(ConfigurationError):
            get_retriever_settings(self.registry)

    def test_invalid_override_rejected(self):
        with self.assertRaises(ConfigurationError):
            get_retriever_settings(self.registry, {'max_hierarchy_depth': -1})

    def test_plain_registry_validates_retriever_settings(self):
        registry = ConfigRegistry(self.tmp_dir.name)
        registry.register_domain(
            RETRIEVER_DOMAIN, MappingConfigProvider(RETRIEVER_DOMAIN, {'max_hierarchy_depth': 0})
        )
        self.assertIsNone(registry.validator_of(RETRIEVER_DOMAIN))

        with self.assertRaises(ConfigurationError):
            get_retriever_settings(registry)
        self.assertIsNotNone(registry.validator_of(RETRIEVER_DOMAIN))

    def test_unvalidated_domain_loaded_as_is(self):
        registry = ConfigRegistry(self.tmp_dir.name)
        registry.register_domain("other", MappingConfigProvider("other", {'anything': [1, 2]}))

        self.assertEqual(registry.load("other", {'extra': True}), {'anything': [1, 2], 'extra': True})


class TestMergeSettings(unittest.TestCase):

    def test_nested_mappings_merged_key_by_key(self):
        base = {'logging': {'level': "INFO", 'json_logs': False}, 'max_hierarchy_depth': 5}

        merged = merge_settings(base, {'logging': {'level': "DEBUG"}, 'max_hierarchy_depth': 8})

        self.assertEqual(merged, {'logging': {'level': "DEBUG", 'json_logs': False}, 'max_hierarchy_depth': 8})
        self.assertEqual(base['logging']['level'], "INFO")

    def test_non_mapping_replaces_mapping(self):
        self.assertEqual(merge_settings({'logging': {'level': "INFO"}}, {'logging': None}), {'logging': None})


if __name__ == "__main__":
    unittest.main()
