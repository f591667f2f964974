"""
Generic Activity Templates - flat checklists used for every home
One template per activity type; property-specific templates override these when registered
"""

from shared.enums import ActivityType

ADHOC_TEMPLATE = {
    'type': ActivityType.ADHOC.value,
    'name': 'Adhoc',
    'description': 'General maintenance or one-off tasks',
    'estimated_total_time': 30,
    'tasks': [
        {
            'id': 'adhoc-1',
            'name': 'Assess Situation',
            'description': 'Review the adhoc request and assess what needs to be done',
            'required': True,
            'estimated_time': 5,
            'photo_required': True,
            'photo_count': 2,
            'order': 1
        },
        {
            'id': 'adhoc-2',
            'name': 'Complete Task',
            'description': 'Perform the requested adhoc task',
            'required': True,
            'estimated_time': 20,
            'photo_required': True,
            'photo_count': 3,
            'order': 2,
            'dependencies': ['adhoc-1']
        },
        {
            'id': 'adhoc-3',
            'name': 'Verify Completion',
            'description': 'Verify that the task has been completed satisfactorily',
            'required': True,
            'estimated_time': 5,
            'photo_required': False,
            'order': 3,
            'dependencies': ['adhoc-2']
        }
    ]
}

DEPROVISIONING_TEMPLATE = {
    'type': ActivityType.DEPROVISIONING.value,
    'name': 'De-provisioning',
    'description': 'Preparing home for guest departure',
    'estimated_total_time': 60,
    'tasks': [
        {
            'id': 'depro-1',
            'name': 'Check Guest Departure',
            'description': 'Verify guest has checked out and belongings are removed',
            'required': True,
            'estimated_time': 5,
            'photo_required': True,
            'photo_count': 2,
            'order': 1
        },
        {
            'id': 'depro-2',
            'name': 'Inventory Check',
            'description': 'Check all items are present and in good condition',
            'required': True,
            'estimated_time': 15,
            'photo_required': True,
            'photo_count': 5,
            'order': 2
        },
        {
            'id': 'depro-3',
            'name': 'Damage Assessment',
            'description': 'Document any damage or issues found',
            'required': True,
            'estimated_time': 10,
            'photo_required': True,
            'photo_count': 3,
            'order': 3
        },
        {
            'id': 'depro-4',
            'name': 'Secure Property',
            'description': 'Lock all doors, windows, and secure the property',
            'required': True,
            'estimated_time': 5,
            'photo_required': False,
            'order': 4
        }
    ]
}

MEET_GREET_TEMPLATE = {
    'type': ActivityType.MEET_GREET.value,
    'name': 'Meet & Greet',
    'description': 'Guest arrival and orientation',
    'estimated_total_time': 30,
    'tasks': [
        {
            'id': 'meet-1',
            'name': 'Welcome Guest',
            'description': 'Greet guest upon arrival and verify identity',
            'required': True,
            'estimated_time': 5,
            'photo_required': False,
            'order': 1
        },
        {
            'id': 'meet-2',
            'name': 'Property Tour',
            'description': 'Provide tour of the property and explain key features',
            'required': True,
            'estimated_time': 15,
            'photo_required': True,
            'photo_count': 2,
            'order': 2
        },
        {
            'id': 'meet-3',
            'name': 'Key Handover',
            'description': 'Hand over keys and explain access procedures',
            'required': True,
            'estimated_time': 5,
            'photo_required': True,
            'photo_count': 1,
            'order': 3
        },
        {
            'id': 'meet-4',
            'name': 'Documentation',
            'description': 'Provide welcome materials and emergency contacts',
            'required': True,
            'estimated_time': 5,
            'photo_required': False,
            'order': 4
        }
    ]
}

MAID_SERVICE_TEMPLATE = {
    'type': ActivityType.MAID_SERVICE.value,
    'name': 'Maid Service',
    'description': 'Cleaning and housekeeping',
    'estimated_total_time': 90,
    'tasks': [
        {
            'id': 'maid-1',
            'name': 'Bedroom Cleaning',
            'description': 'Clean all bedrooms, make beds, and organize',
            'required': True,
            'estimated_time': 20,
            'photo_required': True,
            'photo_count': 2,
            'order': 1
        },
        {
            'id': 'maid-2',
            'name': 'Bathroom Cleaning',
            'description': 'Clean all bathrooms, restock supplies',
            'required': True,
            'estimated_time': 20,
            'photo_required': True,
            'photo_count': 2,
            'order': 2
        },
        {
            'id': 'maid-3',
            'name': 'Kitchen Cleaning',
            'description': 'Clean kitchen, appliances, and restock basics',
            'required': True,
            'estimated_time': 20,
            'photo_required': True,
            'photo_count': 3,
            'order': 3
        },
        {
            'id': 'maid-4',
            'name': 'Living Areas',
            'description': 'Clean living rooms, dining areas, and common spaces',
            'required': True,
            'estimated_time': 20,
            'photo_required': True,
            'photo_count': 2,
            'order': 4
        },
        {
            'id': 'maid-5',
            'name': 'Final Inspection',
            'description': 'Final walkthrough to ensure everything is clean',
            'required': True,
            'estimated_time': 10,
            'photo_required': True,
            'photo_count': 1,
            'order': 5,
            'dependencies': ['maid-1', 'maid-2', 'maid-3', 'maid-4']
        }
    ]
}

PROVISIONING_TEMPLATE = {
    'type': ActivityType.PROVISIONING.value,
    'name': 'Provisioning',
    'description': 'Preparing home for guest arrival',
    'estimated_total_time': 75,
    'tasks': [
        {
            'id': 'prov-1',
            'name': 'Welcome Package',
            'description': 'Prepare and place welcome package',
            'required': True,
            'estimated_time': 10,
            'photo_required': True,
            'photo_count': 2,
            'order': 1
        },
        {
            'id': 'prov-2',
            'name': 'Stock Supplies',
            'description': 'Stock kitchen, bathroom, and household supplies',
            'required': True,
            'estimated_time': 20,
            'photo_required': True,
            'photo_count': 3,
            'order': 2
        },
        {
            'id': 'prov-3',
            'name': 'Linen Setup',
            'description': 'Prepare all beds with fresh linens',
            'required': True,
            'estimated_time': 15,
            'photo_required': True,
            'photo_count': 2,
            'order': 3
        },
        {
            'id': 'prov-4',
            'name': 'Property Check',
            'description': 'Final check that everything is ready for guest',
            'required': True,
            'estimated_time': 10,
            'photo_required': True,
            'photo_count': 3,
            'order': 4
        },
        {
            'id': 'prov-5',
            'name': 'Documentation',
            'description': 'Prepare welcome materials and instructions',
            'required': True,
            'estimated_time': 10,
            'photo_required': False,
            'order': 5
        },
        {
            'id': 'prov-6',
            'name': 'Key Preparation',
            'description': 'Prepare keys and access codes for guest',
            'required': True,
            'estimated_time': 10,
            'photo_required': True,
            'photo_count': 1,
            'order': 6
        }
    ]
}

TURN_TEMPLATE = {
    'type': ActivityType.TURN.value,
    'name': 'Turn',
    'description': 'Complete home turnover between guests',
    'estimated_total_time': 180,
    'tasks': [
        {
            'id': 'turn-1',
            'name': 'Guest Departure Check',
            'description': 'Verify guest has checked out and property is clear',
            'required': True,
            'estimated_time': 10,
            'photo_required': True,
            'photo_count': 3,
            'order': 1
        },
        {
            'id': 'turn-2',
            'name': 'Deep Clean',
            'description': 'Complete deep cleaning of entire property',
            'required': True,
            'estimated_time': 60,
            'photo_required': True,
            'photo_count': 8,
            'order': 2,
            'dependencies': ['turn-1']
        },
        {
            'id': 'turn-3',
            'name': 'Linen Change',
            'description': 'Change all linens and towels',
            'required': True,
            'estimated_time': 20,
            'photo_required': True,
            'photo_count': 3,
            'order': 3,
            'dependencies': ['turn-2']
        },
        {
            'id': 'turn-4',
            'name': 'Restock Supplies',
            'description': 'Restock all consumables and supplies',
            'required': True,
            'estimated_time': 20,
            'photo_required': True,
            'photo_count': 4,
            'order': 4,
            'dependencies': ['turn-2']
        },
        {
            'id': 'turn-5',
            'name': 'Property Inspection',
            'description': 'Complete inspection for damage and maintenance issues',
            'required': True,
            'estimated_time': 20,
            'photo_required': True,
            'photo_count': 5,
            'order': 5,
            'dependencies': ['turn-2', 'turn-3', 'turn-4']
        },
        {
            'id': 'turn-6',
            'name': 'Welcome Setup',
            'description': 'Prepare welcome package and documentation',
            'required': True,
            'estimated_time': 15,
            'photo_required': True,
            'photo_count': 2,
            'order': 6,
            'dependencies': ['turn-5']
        },
        {
            'id': 'turn-7',
            'name': 'Final Verification',
            'description': 'Final walkthrough to ensure property is ready',
            'required': True,
            'estimated_time': 15,
            'photo_required': True,
            'photo_count': 3,
            'order': 7,
            'dependencies': ['turn-6']
        }
    ]
}

GENERIC_TEMPLATES = [
    ADHOC_TEMPLATE,
    DEPROVISIONING_TEMPLATE,
    MEET_GREET_TEMPLATE,
    MAID_SERVICE_TEMPLATE,
    PROVISIONING_TEMPLATE,
    TURN_TEMPLATE,
]
