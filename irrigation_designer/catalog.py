"""
Equipment Catalog
Embedded default equipment tables and checked lookups
"""

import copy
import logging

from .exceptions import CatalogLookupError

logger = logging.getLogger(__name__)


SPRINKLER_HEADS = {
    'i-40-04-ss': {
        'category': 'rotor',
        'name': 'Rotor - Large Turf',
        'manufacturer': 'Hunter',
        'model': 'I-40-04-SS',
        'default_radius_ft': 42.0,
        'gpm_at_default_radius': 4.2,
        'psi': 45.0,
        'nozzle': '#6.0'
    },
    '5004-pc-sam': {
        'category': 'rotor',
        'name': 'Rotor - Medium Turf',
        'manufacturer': 'Rain Bird',
        'model': '5004-PC-SAM',
        'default_radius_ft': 35.0,
        'gpm_at_default_radius': 3.0,
        'psi': 45.0,
        'nozzle': '#3.0'
    },
    'pgp-adj': {
        'category': 'rotor',
        'name': 'Rotor - Small Turf',
        'manufacturer': 'Hunter',
        'model': 'PGP-ADJ',
        'default_radius_ft': 25.0,
        'gpm_at_default_radius': 2.2,
        'psi': 45.0,
        'nozzle': '#2.0'
    },
    '1804-sam-prs': {
        'category': 'spray',
        'name': 'Spray - Fixed',
        'manufacturer': 'Rain Bird',
        'model': '1804-SAM-PRS',
        'default_radius_ft': 12.0,
        'gpm_at_default_radius': 1.5,
        'psi': 30.0,
        'nozzle': '15-SST'
    },
    'mp3000': {
        'category': 'rotary-nozzle',
        'name': 'Spray - Rotary Nozzle',
        'manufacturer': 'Hunter',
        'model': 'MP Rotator MP3000',
        'default_radius_ft': 15.0,
        'gpm_at_default_radius': 0.9,
        'psi': 40.0,
        'nozzle': 'MP3000'
    },
    'he-van-15-sst': {
        'category': 'strip',
        'name': 'Spray - Strip',
        'manufacturer': 'Rain Bird',
        'model': 'HE-VAN-15-SST',
        'default_radius_ft': 8.0,
        'gpm_at_default_radius': 1.0,
        'psi': 30.0,
        'nozzle': 'HE-VAN'
    },
    'tlcv-09-12-500': {
        'category': 'drip',
        'name': 'Drip Emitter Line',
        'manufacturer': 'Netafim',
        'model': 'Techline TLCV-09-12-500',
        'default_radius_ft': 0.0,
        'gpm_at_default_radius': 0.0,
        'psi': 30.0,
        'nozzle': '0.9 GPH @ 12" OC'
    },
    '44rc': {
        'category': 'quick-coupler',
        'name': 'Quick Coupler Valve',
        'manufacturer': 'Rain Bird',
        'model': '44RC',
        'default_radius_ft': 0.0,
        'gpm_at_default_radius': 0.0,
        'psi': 0.0,
        'nozzle': ''
    }
}

VALVES = {
    'peb-100': {
        'category': 'zone',
        'name': 'Zone Valve - 1 inch',
        'manufacturer': 'Rain Bird',
        'model': 'PEB-100',
        'size_in': 1.0
    },
    'peb-150': {
        'category': 'zone',
        'name': 'Zone Valve - 1.5 inch',
        'manufacturer': 'Rain Bird',
        'model': 'PEB-150',
        'size_in': 1.5
    },
    '200-peb': {
        'category': 'master',
        'name': 'Master Valve',
        'manufacturer': 'Rain Bird',
        'model': '200-PEB',
        'size_in': 2.0
    },
    '009m2-qt': {
        'category': 'backflow',
        'name': 'Backflow - RPZ',
        'manufacturer': 'Watts',
        'model': '009M2-QT',
        'size_in': 1.5
    }
}

CONTROLLERS = {
    'esp-lxme2': {
        'name': 'Controller',
        'manufacturer': 'Rain Bird',
        'model': 'ESP-LXME2'
    }
}

SENSORS = {
    'rain-clik': {
        'name': 'Rain Sensor',
        'manufacturer': 'Hunter',
        'model': 'Rain-Clik'
    }
}

ACCESSORIES = {
    'swing-joint': {
        'name': 'Swing Joint',
        'manufacturer': 'Hunter',
        'model': 'SJ-506'
    },
    'valve-box-jumbo': {
        'name': 'Valve Box - Standard',
        'manufacturer': 'Carson',
        'model': '1419-12'
    },
    'wire-common': {
        'name': 'Wire - Common',
        'manufacturer': '',
        'model': '14 AWG UF, white'
    },
    'wire-zone': {
        'name': 'Wire - Zone',
        'manufacturer': '',
        'model': '18 AWG UF, color-coded'
    },
    'drip-kit': {
        'name': 'Drip Zone Kit',
        'manufacturer': 'Rain Bird',
        'model': 'XCZ-100-PRB-COM'
    }
}

# Every id the design engine looks up by name
REQUIRED_ENTRIES = {
    'heads': ['i-40-04-ss', '5004-pc-sam', 'pgp-adj', '1804-sam-prs',
              'mp3000', 'he-van-15-sst', 'tlcv-09-12-500', '44rc'],
    'valves': ['peb-100', 'peb-150', '200-peb', '009m2-qt'],
    'controllers': ['esp-lxme2'],
    'sensors': ['rain-clik'],
    'accessories': ['swing-joint', 'valve-box-jumbo', 'wire-common',
                    'wire-zone', 'drip-kit']
}


class Catalog:
    """Equipment tables with lookups that fail loudly on missing entries"""

    def __init__(self, overrides=None):
        """
        Build a catalog from the embedded tables

        Args:
            overrides: Optional {section: {id: {field: value}}} mapping.
                       Fields are merged into existing entries; unknown ids
                       are added as new entries.
        """
        self.sections = {
            'heads': copy.deepcopy(SPRINKLER_HEADS),
            'valves': copy.deepcopy(VALVES),
            'controllers': copy.deepcopy(CONTROLLERS),
            'sensors': copy.deepcopy(SENSORS),
            'accessories': copy.deepcopy(ACCESSORIES)
        }

        for section, entries in (overrides or {}).items():
            if section not in self.sections:
                logger.warning(f"Ignoring unknown catalog section '{section}'")
                continue
            for entry_id, fields in entries.items():
                self.sections[section].setdefault(entry_id, {}).update(fields)

        self.verify()

    def verify(self):
        """
        Check that every entry the engine references exists

        Raises:
            CatalogLookupError: On the first missing entry
        """
        for section, entry_ids in REQUIRED_ENTRIES.items():
            for entry_id in entry_ids:
                self.get(section, entry_id)

    def get(self, section, entry_id):
        """
        Look up a catalog entry by id

        Args:
            section: 'heads', 'valves', 'controllers', 'sensors' or 'accessories'
            entry_id: Catalog id (e.g. 'peb-100')

        Returns:
            Entry dictionary

        Raises:
            CatalogLookupError: If the section or id is unknown
        """
        entries = self.sections.get(section)
        if entries is None or entry_id not in entries:
            raise CatalogLookupError(section, entry_id)
        return entries[entry_id]

    def head(self, head_id):
        return self.get('heads', head_id)

    def valve(self, valve_id):
        return self.get('valves', valve_id)

    def controller(self, controller_id):
        return self.get('controllers', controller_id)

    def sensor(self, sensor_id):
        return self.get('sensors', sensor_id)

    def accessory(self, accessory_id):
        return self.get('accessories', accessory_id)

    def find_head_by_model(self, model):
        """
        Find a sprinkler head entry by its model string

        Args:
            model: Manufacturer model (e.g. 'PGP-ADJ')

        Returns:
            Entry dictionary or None if no head uses that model
        """
        for entry in self.sections['heads'].values():
            if entry['model'] == model:
                return entry
        return None
