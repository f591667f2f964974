"""
COS285 Cockspur Street - property-specific provisioning template
Phased checklist: arrive tasks, room-by-room work during the stay setup, then depart checks.
The Hive heating task has summer and winter variants selected by season.
"""

from shared.enums import (
    ActivityType, PhaseName, Season, TaskAction, PriorityLevel, AlertLevel, SensitivityLevel,
)

HIGH = PriorityLevel.HIGH.value
MEDIUM = PriorityLevel.MEDIUM.value
LOW = PriorityLevel.LOW.value

COS285_METADATA = {
    'property_code': 'COS285',
    'property_name': 'Cockspur Street',
    'version': '107',
    'sensitivity_level': SensitivityLevel.LOW.value,
    'has_doorman': False,
    'storage': [
        'Left-hand wardrobe in double bedroom',
        'Cupboard below bookshelves (NOT under kitchen sink)'
    ],
    'heating': {
        'type': 'Hive smart thermostat',
        'location': 'Hall',
        'summer_setting': 'OFF / Snowflake',
        'winter_settings': {'booking': '21°C', 'empty': '5°C', 'host': '15°C'}
    },
    'wifi': [
        {'name': 'EE-BrightBox-5g2t9g', 'password': '[PASSWORD]', 'location': 'Master Bedroom - left bedside table'},
        {'name': 'BT4G-HOMEHUB-9117', 'password': '[PASSWORD]', 'location': 'Sitting Room'}
    ],
    'alerts': [
        {'type': AlertLevel.CRITICAL.value, 'message': 'NEVER leave OFS fans in the home (ceiling fans present in bedrooms)'},
        {'type': AlertLevel.CRITICAL.value, 'message': "Water plants, don't close curtains (plants will die)"},
        {'type': AlertLevel.WARNING.value, 'message': "Bathroom sensors look like blown bulbs - DON'T report as broken"},
        {'type': AlertLevel.WARNING.value, 'message': 'DO NOT water artificial plants'}
    ],
    'check_instructions': [
        'Report blown light bulbs',
        'Check TV remote batteries',
        'Store HO linens in bedroom cupboards (NEVER under kitchen sink)'
    ],
    'exit_instructions': {
        'locking': "Close/lock windows, turn off lights, double lock front door (can't open from outside when closed)",
        'refuse': 'Take to bins on Warwick House Street (turn left, halfway down street)',
        'checkout': 'Leave one key set in kitchen, double lock door, post second set through letterbox in provided envelope'
    }
}

ARRIVE_TASKS = [
    {
        'id': 'arrive-1', 'name': 'Bag and tag host bedding',
        'description': 'Bag and tag all host bedding for storage',
        'action': TaskAction.BAG_AND_TAG.value, 'subject': 'host bedding',
        'required': True, 'estimated_time': 10, 'photo_required': True, 'photo_count': 2,
        'order': 1, 'priority': HIGH
    },
    {
        'id': 'arrive-2', 'name': 'Check linen quantity & rejects',
        'description': 'Verify sufficient linen quantity and check for any damaged items',
        'action': TaskAction.CHECK.value, 'subject': 'linen quantity & rejects',
        'required': True, 'estimated_time': 5, 'photo_required': False,
        'order': 2, 'priority': HIGH
    },
    {
        'id': 'arrive-3', 'name': 'Check iron & ironing board present',
        'description': 'Verify iron and ironing board are present and functional',
        'action': TaskAction.CHECK.value, 'subject': 'iron & ironing board',
        'required': True, 'estimated_time': 2, 'photo_required': False,
        'order': 3, 'priority': MEDIUM
    },
    {
        'id': 'arrive-4', 'name': 'Check vacuum cleaner',
        'description': 'Verify vacuum cleaner is present, has bag, and works',
        'action': TaskAction.CHECK.value, 'subject': 'vacuum cleaner (present, has bag, works)',
        'required': True, 'estimated_time': 3, 'photo_required': False,
        'order': 4, 'priority': MEDIUM
    },
    {
        'id': 'arrive-5', 'name': 'Test WiFi connection',
        'description': 'Test WiFi connection and signal strength throughout property',
        'action': TaskAction.TEST.value, 'subject': 'WiFi connection & signal strength',
        'required': True, 'estimated_time': 5, 'photo_required': False,
        'order': 5, 'priority': HIGH
    },
    {
        'id': 'arrive-6', 'name': 'Verify host items',
        'description': 'Verify host items match ITT and Booking Record',
        'action': TaskAction.VERIFY.value, 'subject': 'host items match ITT and Booking Record',
        'required': True, 'estimated_time': 10, 'photo_required': True, 'photo_count': 3,
        'order': 6, 'priority': HIGH
    },
    {
        'id': 'arrive-7', 'name': 'Photograph surfaces and furniture',
        'description': 'Take photographs of all surfaces and furniture for record',
        'action': TaskAction.PHOTOGRAPH.value, 'subject': 'surfaces and furniture',
        'required': True, 'estimated_time': 10, 'photo_required': True, 'photo_count': 8,
        'order': 7, 'priority': MEDIUM
    },
    {
        'id': 'arrive-8', 'name': 'Connect WiFi Network 1',
        'description': 'Connect to primary WiFi network in Master Bedroom',
        'action': TaskAction.CONNECT.value, 'subject': 'WiFi Network (Master Bedroom)',
        'location': 'Master Bedroom - left bedside table',
        'required': True, 'estimated_time': 3, 'photo_required': False,
        'order': 8, 'priority': HIGH
    },
    {
        'id': 'arrive-9', 'name': 'Connect WiFi Network 2',
        'description': 'Connect to secondary WiFi network in Sitting Room',
        'action': TaskAction.CONNECT.value, 'subject': 'second WiFi Network (Sitting Room)',
        'location': 'Sitting Room',
        'required': True, 'estimated_time': 3, 'photo_required': False,
        'order': 9, 'priority': HIGH
    }
]

DURING_ROOMS = [
    {
        'id': 'hall', 'code': 'H', 'name': 'Hall',
        'tasks': [
            {
                'id': 'hall-1', 'name': 'Sweep under and behind furniture',
                'description': 'Sweep under and behind all furniture in the hall',
                'action': TaskAction.SWEEP.value, 'subject': 'under and behind furniture', 'location': 'Hall',
                'required': True, 'estimated_time': 5, 'photo_required': False,
                'order': 1, 'priority': MEDIUM
            },
            {
                'id': 'hall-2', 'name': 'Leave out window key',
                'description': 'Leave window key on magnetic bulls eye near door',
                'action': TaskAction.LEAVE_OUT.value, 'subject': 'window key',
                'location': 'On magnetic bulls eye near door',
                'required': True, 'estimated_time': 1, 'photo_required': False,
                'order': 2, 'priority': HIGH
            },
            {
                'id': 'hall-3', 'name': 'Seal cupboard',
                'description': 'Seal cupboard with tamper ribbon',
                'action': TaskAction.SEAL.value, 'subject': 'cupboard', 'location': 'Hall',
                'required': True, 'estimated_time': 2, 'photo_required': True, 'photo_count': 1,
                'order': 3, 'priority': MEDIUM
            },
            {
                'id': 'hall-4-summer', 'name': 'Set Hive heating control (Summer)',
                'description': 'Set Hive to OFF / Snowflake for summer',
                'action': TaskAction.SET.value, 'subject': 'Hive heating control', 'location': 'Hall',
                'required': True, 'estimated_time': 2, 'photo_required': False,
                'order': 4, 'priority': HIGH,
                'conditional': {'season': Season.SUMMER.value}
            },
            {
                'id': 'hall-4-winter', 'name': 'Set Hive heating control (Winter)',
                'description': 'Set Hive to 21°C for booking, 5°C when empty, or 15°C for host return',
                'action': TaskAction.SET.value, 'subject': 'Hive heating control', 'location': 'Hall',
                'required': True, 'estimated_time': 2, 'photo_required': False,
                'order': 4, 'priority': HIGH,
                'conditional': {'season': Season.WINTER.value}
            }
        ]
    },
    {
        'id': 'second-bedroom', 'code': 'SDB', 'name': 'Second Bedroom', 'location': 'First bedroom on left',
        'tasks': [
            {
                'id': 'sdb-1', 'name': 'Bag and tag host bedding/linen',
                'description': 'Bag and tag all host bedding/linen, use OFS linen',
                'action': TaskAction.BAG_AND_TAG.value, 'subject': 'all host bedding/linen, use OFS linen',
                'location': 'Second Bedroom',
                'required': True, 'estimated_time': 10, 'photo_required': True, 'photo_count': 2,
                'order': 1, 'priority': HIGH
            },
            {
                'id': 'sdb-2', 'name': 'Sweep under and behind furniture',
                'description': 'Sweep under and behind all furniture',
                'action': TaskAction.SWEEP.value, 'subject': 'under and behind furniture', 'location': 'Second Bedroom',
                'required': True, 'estimated_time': 5, 'photo_required': False,
                'order': 2, 'priority': MEDIUM
            },
            {
                'id': 'sdb-3', 'name': 'Check bed slats',
                'description': 'Check bed slats, raise ticket if broken',
                'action': TaskAction.CHECK.value, 'subject': 'bed slats (raise ticket if broken)',
                'location': 'Second Bedroom',
                'required': True, 'estimated_time': 2, 'photo_required': False,
                'order': 3, 'priority': HIGH
            },
            {
                'id': 'sdb-4', 'name': 'Seal right wardrobe',
                'description': 'Seal right wardrobe (use for storage), bag and tag host clutter',
                'action': TaskAction.SEAL.value, 'subject': 'right wardrobe', 'location': 'Second Bedroom',
                'required': True, 'estimated_time': 5, 'photo_required': True, 'photo_count': 2,
                'order': 4, 'priority': MEDIUM
            },
            {
                'id': 'sdb-5', 'name': 'Leave out host hangers',
                'description': "Leave out host hangers in left wardrobe (don't seal)",
                'action': TaskAction.LEAVE_OUT.value, 'subject': 'host hangers in left wardrobe',
                'location': 'Second Bedroom - left wardrobe',
                'required': True, 'estimated_time': 2, 'photo_required': False,
                'order': 5, 'priority': LOW
            }
        ]
    },
    {
        'id': 'master-bedroom', 'code': 'MB', 'name': 'Master Bedroom',
        'tasks': [
            {
                'id': 'mb-1', 'name': 'Bag and tag host clutter',
                'description': 'Bag and tag host clutter in left wardrobe',
                'action': TaskAction.BAG_AND_TAG.value, 'subject': 'host clutter in left wardrobe',
                'location': 'Master Bedroom - left wardrobe',
                'required': True, 'estimated_time': 5, 'photo_required': True, 'photo_count': 2,
                'order': 1, 'priority': MEDIUM
            },
            {
                'id': 'mb-2', 'name': 'Check HIVE router',
                'description': 'Check HIVE router is on (bottom drawer of left bedside cabinet) - unplug/replug if needed',
                'action': TaskAction.CHECK.value, 'subject': 'HIVE router is on',
                'location': 'Bottom drawer of left bedside cabinet',
                'required': True, 'estimated_time': 3, 'photo_required': False,
                'order': 2, 'priority': HIGH
            },
            {
                'id': 'mb-3', 'name': 'Check bed slats',
                'description': 'Check bed slats for any damage',
                'action': TaskAction.CHECK.value, 'subject': 'bed slats', 'location': 'Master Bedroom',
                'required': True, 'estimated_time': 2, 'photo_required': False,
                'order': 3, 'priority': HIGH
            },
            {
                'id': 'mb-4', 'name': 'Bag and tag wardrobe clutter',
                'description': 'Bag and tag host clutter in wardrobe',
                'action': TaskAction.BAG_AND_TAG.value, 'subject': 'host clutter in wardrobe',
                'location': 'Master Bedroom',
                'required': True, 'estimated_time': 5, 'photo_required': True, 'photo_count': 2,
                'order': 4, 'priority': MEDIUM
            },
            {
                'id': 'mb-5', 'name': 'Leave out host hangers',
                'description': 'Leave out host hangers',
                'action': TaskAction.LEAVE_OUT.value, 'subject': 'host hangers', 'location': 'Master Bedroom',
                'required': True, 'estimated_time': 1, 'photo_required': False,
                'order': 5, 'priority': LOW
            },
            {
                'id': 'mb-6', 'name': 'Prepare wardrobe for guest',
                'description': 'Prepare wardrobe for guest use',
                'action': TaskAction.PREPARE_FOR_GUEST.value, 'subject': 'Wardrobe', 'location': 'Master Bedroom',
                'required': True, 'estimated_time': 3, 'photo_required': False,
                'order': 6, 'priority': HIGH
            },
            {
                'id': 'mb-7', 'name': 'Prepare right cupboard for guest',
                'description': 'Prepare right cupboard for guest use',
                'action': TaskAction.PREPARE_FOR_GUEST.value, 'subject': 'right cupboard', 'location': 'Master Bedroom',
                'required': True, 'estimated_time': 2, 'photo_required': False,
                'order': 7, 'priority': HIGH
            },
            {
                'id': 'mb-8', 'name': 'Prepare left cupboard for guest',
                'description': 'Prepare left cupboard for guest use',
                'action': TaskAction.PREPARE_FOR_GUEST.value, 'subject': 'left cupboard', 'location': 'Master Bedroom',
                'required': True, 'estimated_time': 2, 'photo_required': False,
                'order': 8, 'priority': HIGH
            }
        ]
    },
    {
        'id': 'shower-bathroom', 'code': 'SBTH', 'name': 'Shower Bathroom', 'location': 'Red tiles',
        'tasks': [
            {
                'id': 'sbth-1', 'name': 'Seal mirrored cabinet',
                'description': 'Seal mirrored cabinet behind door',
                'action': TaskAction.SEAL.value, 'subject': 'mirrored cabinet', 'location': 'Behind door',
                'required': True, 'estimated_time': 2, 'photo_required': True, 'photo_count': 1,
                'order': 1, 'priority': MEDIUM
            },
            {
                'id': 'sbth-2', 'name': 'Report any mould',
                'description': 'Troubleshoot: Report any mould found',
                'action': TaskAction.TROUBLESHOOT.value, 'subject': 'Report any mould', 'location': 'Shower Bathroom',
                'required': True, 'estimated_time': 3, 'photo_required': True, 'photo_count': 2,
                'order': 2, 'priority': HIGH
            },
            {
                'id': 'sbth-3', 'name': 'Bag and tag host clutter',
                'description': 'Bag and tag any host clutter',
                'action': TaskAction.BAG_AND_TAG.value, 'subject': 'host clutter', 'location': 'Shower Bathroom',
                'required': True, 'estimated_time': 3, 'photo_required': False,
                'order': 3, 'priority': MEDIUM
            }
        ]
    },
    {
        'id': 'master-bathroom', 'code': 'B', 'name': 'Master Bathroom', 'location': 'Black tiles',
        'tasks': [
            {
                'id': 'b-1', 'name': 'Report any mould',
                'description': 'Troubleshoot: Report any mould found',
                'action': TaskAction.TROUBLESHOOT.value, 'subject': 'Report any mould', 'location': 'Master Bathroom',
                'required': True, 'estimated_time': 3, 'photo_required': True, 'photo_count': 2,
                'order': 1, 'priority': HIGH
            },
            {
                'id': 'b-2', 'name': 'Bag and tag host clutter',
                'description': 'Bag and tag any host clutter',
                'action': TaskAction.BAG_AND_TAG.value, 'subject': 'host clutter', 'location': 'Master Bathroom',
                'required': True, 'estimated_time': 3, 'photo_required': False,
                'order': 2, 'priority': MEDIUM
            }
        ]
    },
    {
        'id': 'sitting-room', 'code': 'SR', 'name': 'Sitting Room',
        'tasks': [
            {
                'id': 'sr-1', 'name': 'Vacuum with Amazon Basics hoover',
                'description': 'Use Amazon Basics hoover to vacuum sitting room',
                'action': TaskAction.VACUUM.value, 'subject': 'Sitting Room with Amazon Basics hoover',
                'location': 'Sitting Room',
                'required': True, 'estimated_time': 10, 'photo_required': False,
                'order': 1, 'priority': HIGH
            },
            {
                'id': 'sr-2', 'name': 'Bag and tag host clutter',
                'description': 'Bag and tag any host clutter',
                'action': TaskAction.BAG_AND_TAG.value, 'subject': 'host clutter', 'location': 'Sitting Room',
                'required': True, 'estimated_time': 5, 'photo_required': False,
                'order': 2, 'priority': MEDIUM
            },
            {
                'id': 'sr-3', 'name': 'Seal wooden cabinet drawers',
                'description': 'Seal wooden cabinet drawers (right side as you enter)',
                'action': TaskAction.SEAL.value, 'subject': 'wooden cabinet drawers',
                'location': 'Right side as you enter',
                'required': True, 'estimated_time': 3, 'photo_required': True, 'photo_count': 1,
                'order': 3, 'priority': MEDIUM
            }
        ]
    },
    {
        'id': 'kitchen', 'code': 'K', 'name': 'Kitchen',
        'tasks': [
            {
                'id': 'k-1', 'name': 'Bag and tag host clutter',
                'description': 'Bag and tag any host clutter',
                'action': TaskAction.BAG_AND_TAG.value, 'subject': 'host clutter', 'location': 'Kitchen',
                'required': True, 'estimated_time': 5, 'photo_required': False,
                'order': 1, 'priority': MEDIUM
            },
            {
                'id': 'k-2', 'name': 'Check cutlery & crockery',
                'description': 'Check cutlery & crockery (cleanliness, quantity vs max occupancy)',
                'action': TaskAction.CHECK.value, 'subject': 'cutlery & crockery', 'location': 'Kitchen',
                'required': True, 'estimated_time': 5, 'photo_required': False,
                'order': 2, 'priority': HIGH
            },
            {
                'id': 'k-3', 'name': 'Empty washing machine',
                'description': 'Empty washing machine with dryer',
                'action': TaskAction.EMPTY.value, 'subject': 'washing machine with dryer', 'location': 'Kitchen',
                'required': True, 'estimated_time': 3, 'photo_required': False,
                'order': 3, 'priority': MEDIUM
            }
        ]
    }
]

DEPART_TASKS = [
    {
        'id': 'depart-1', 'name': 'Quality check: Cleaning',
        'description': 'Perform final quality check for cleaning standards',
        'action': TaskAction.QUALITY_CHECK.value, 'subject': 'Cleaning',
        'required': True, 'estimated_time': 10, 'photo_required': True, 'photo_count': 5,
        'order': 1, 'priority': HIGH
    },
    {
        'id': 'depart-2', 'name': 'Quality check: Maintenance',
        'description': 'Perform final quality check for maintenance issues',
        'action': TaskAction.QUALITY_CHECK.value, 'subject': 'Maintenance',
        'required': True, 'estimated_time': 10, 'photo_required': True, 'photo_count': 3,
        'order': 2, 'priority': HIGH
    },
    {
        'id': 'depart-3', 'name': 'Fill out activity report',
        'description': 'Complete and submit activity report',
        'action': TaskAction.FILL_OUT.value, 'subject': 'activity report',
        'required': True, 'estimated_time': 5, 'photo_required': False,
        'order': 3, 'priority': HIGH
    },
    {
        'id': 'depart-4', 'name': 'Note TL & TM hours',
        'description': 'Record Team Leader and Team Member hours',
        'action': TaskAction.FILL_OUT.value, 'subject': 'TL & TM hours',
        'required': True, 'estimated_time': 2, 'photo_required': False,
        'order': 4, 'priority': HIGH
    },
    {
        'id': 'depart-5', 'name': 'Close & lock all outside doors',
        'description': 'Secure all external doors with proper locks',
        'action': TaskAction.SECURE.value, 'subject': 'Close & lock all outside doors',
        'required': True, 'estimated_time': 3, 'photo_required': False,
        'order': 5, 'priority': HIGH
    },
    {
        'id': 'depart-6', 'name': 'Close & lock all windows',
        'description': 'Secure all windows throughout the property',
        'action': TaskAction.SECURE.value, 'subject': 'Close & lock all windows',
        'required': True, 'estimated_time': 5, 'photo_required': False,
        'order': 6, 'priority': HIGH
    },
    {
        'id': 'depart-7', 'name': 'Turn off all lights',
        'description': 'Ensure all lights are switched off',
        'action': TaskAction.TURN_OFF.value, 'subject': 'all lights',
        'required': True, 'estimated_time': 3, 'photo_required': False,
        'order': 7, 'priority': HIGH
    }
]

COS285_PROVISIONING_TEMPLATE = {
    'type': ActivityType.PROVISIONING.value,
    'name': 'Provisioning - COS285',
    'description': 'Complete provisioning for Cockspur Street property',
    'estimated_total_time': 120,
    'metadata': COS285_METADATA,
    'phases': [
        {'id': 'arrive', 'name': PhaseName.ARRIVE.value, 'order': 1, 'tasks': ARRIVE_TASKS},
        {'id': 'during', 'name': PhaseName.DURING.value, 'order': 2, 'rooms': DURING_ROOMS},
        {'id': 'depart', 'name': PhaseName.DEPART.value, 'order': 3, 'tasks': DEPART_TASKS},
    ]
}
