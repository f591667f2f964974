"""
ALB134 Albert Bridge Road II - property-specific meet & greet template
Guest arrival, room-by-room home tour, then house information before leaving the guest.
"""

from shared.enums import (
    ActivityType, PhaseName, Occupancy, TaskAction, PriorityLevel, AlertLevel, SensitivityLevel,
)

HIGH = PriorityLevel.HIGH.value
MEDIUM = PriorityLevel.MEDIUM.value
LOW = PriorityLevel.LOW.value

ALB134_METADATA = {
    'property_code': 'ALB134',
    'property_name': 'Albert Bridge Road II',
    'version': '1.0.0',
    'sensitivity_level': SensitivityLevel.MEDIUM.value,
    'has_doorman': False,
    'storage': ['Hallway cupboard for cleaning supplies and extra linens'],
    'heating': {
        'type': 'Boiler with portable thermostat',
        'location': 'Boiler in kitchen, portable thermostat in entrance hall',
        'summer_setting': 'Auto',
        'winter_settings': {'day': '20°C', 'night': '18°C', 'away': '15°C'}
    },
    'wifi': [
        {'name': 'BT-F8CTWR', 'password': '[PASSWORD]', 'location': 'Main network throughout property'}
    ],
    'alerts': [
        {'type': AlertLevel.WARNING.value,
         'message': 'Toilet has environmentally friendly low flow flush - may need multiple flushes to clear bowl'},
        {'type': AlertLevel.INFO.value,
         'message': 'Communal hallway lights are NOT on a timer - must be turned off manually when not needed'},
        {'type': AlertLevel.WARNING.value,
         'message': 'Guests should NOT use the vinyl player located in the sitting room'},
        {'type': AlertLevel.INFO.value,
         'message': 'For stays over 8 nights: Explain maid service availability and scheduling'}
    ],
    'check_instructions': [
        'Show guest how to operate all TVs in the property',
        'Explain heating controls - boiler in kitchen, portable thermostat in entrance hall',
        'Demonstrate kitchen appliances and explain usage',
        'Show guest how to access and use the guest app',
        'Review house rules: communal lights, vinyl player restriction, no smoking',
        'Show refuse & recycling location outside building',
        'Provide WiFi network name and password',
        'For stays 8+ nights: Explain maid service schedule and procedures'
    ],
    'exit_instructions': {
        'locking': 'During stay: Close and lock all windows, double lock front door when leaving. '
                   'At checkout: Double lock door, ensure all windows secured.',
        'refuse': 'Refuse and recycling is collected from communal bins outside the building. '
                  "Turn left when exiting, bins are to your left by the white pillar marked 'Mansions'. "
                  'DO NOT leave rubbish bags on the pavement.',
        'checkout': 'Ensure all windows closed and locked, heating set appropriately, all lights off, '
                    'front door double locked'
    }
}

ARRIVAL_TASKS = [
    {
        'id': 'arrival-1', 'name': 'Welcome Guest',
        'description': 'Greet guest warmly upon arrival, verify booking details and identity',
        'action': TaskAction.WELCOME.value, 'subject': 'guest and verify identity',
        'required': True, 'estimated_time': 3, 'photo_required': False,
        'order': 1, 'priority': HIGH
    },
    {
        'id': 'arrival-2', 'name': 'Key Handover',
        'description': 'Provide keys to guest and explain key usage',
        'action': TaskAction.SHOW.value, 'subject': 'keys and access',
        'required': True, 'estimated_time': 2, 'photo_required': True, 'photo_count': 1,
        'order': 2, 'priority': HIGH
    },
    {
        'id': 'arrival-3', 'name': 'Explain Door Locking',
        'description': 'Demonstrate how to lock and unlock the front door, explain double-locking procedure',
        'action': TaskAction.DEMONSTRATE.value, 'subject': 'door locking mechanism', 'location': 'Front Door',
        'required': True, 'estimated_time': 2, 'photo_required': False,
        'order': 3, 'priority': HIGH
    }
]

TOUR_ROOMS = [
    {
        'id': 'entrance-hall', 'code': 'HALL', 'name': 'Entrance Hall / Hallway',
        'tasks': [
            {
                'id': 'hall-1', 'name': 'Show heating thermostat',
                'description': 'Demonstrate portable thermostat in entrance hall and explain temperature controls',
                'action': TaskAction.DEMONSTRATE.value, 'subject': 'heating thermostat', 'location': 'Entrance Hall',
                'required': True, 'estimated_time': 3, 'photo_required': False,
                'order': 1, 'priority': HIGH
            },
            {
                'id': 'hall-2', 'name': 'Explain communal hallway lights',
                'description': 'Explain that communal hallway lights are NOT on a timer and must be turned off manually',
                'action': TaskAction.EXPLAIN.value, 'subject': 'communal hallway lights', 'location': 'Communal Areas',
                'required': True, 'estimated_time': 1, 'photo_required': False,
                'order': 2, 'priority': MEDIUM
            },
            {
                'id': 'hall-3', 'name': 'Show hallway cupboard',
                'description': 'Show hallway cupboard with cleaning supplies and extra linens',
                'action': TaskAction.SHOW.value, 'subject': 'hallway cupboard storage', 'location': 'Entrance Hall',
                'required': True, 'estimated_time': 1, 'photo_required': False,
                'order': 3, 'priority': LOW
            },
            {
                'id': 'hall-4', 'name': 'Explain window locking',
                'description': 'Demonstrate how to close and lock all windows properly',
                'action': TaskAction.DEMONSTRATE.value, 'subject': 'window locking', 'location': 'Throughout Home',
                'required': True, 'estimated_time': 2, 'photo_required': False,
                'order': 4, 'priority': HIGH
            }
        ]
    },
    {
        'id': 'kitchen', 'code': 'KITCH', 'name': 'Kitchen',
        'tasks': [
            {
                'id': 'kitchen-1', 'name': 'Show boiler controls',
                'description': 'Demonstrate boiler location and basic heating/hot water controls',
                'action': TaskAction.DEMONSTRATE.value, 'subject': 'boiler controls', 'location': 'Kitchen',
                'required': True, 'estimated_time': 3, 'photo_required': False,
                'order': 1, 'priority': HIGH
            },
            {
                'id': 'kitchen-2', 'name': 'Demonstrate kitchen appliances',
                'description': 'Show how to operate oven, dishwasher, and other kitchen appliances',
                'action': TaskAction.DEMONSTRATE.value, 'subject': 'kitchen appliances', 'location': 'Kitchen',
                'required': True, 'estimated_time': 4, 'photo_required': False,
                'order': 2, 'priority': MEDIUM
            },
            {
                'id': 'kitchen-3', 'name': 'Show kitchen amenities',
                'description': 'Point out coffee maker, kettle, and basic kitchen supplies provided',
                'action': TaskAction.SHOW.value, 'subject': 'kitchen amenities', 'location': 'Kitchen',
                'required': True, 'estimated_time': 2, 'photo_required': False,
                'order': 3, 'priority': LOW
            }
        ]
    },
    {
        'id': 'living-areas', 'code': 'LIVING', 'name': 'Living Areas / Sitting Room',
        'tasks': [
            {
                'id': 'living-1', 'name': 'Demonstrate TV operation',
                'description': 'Show guest how to operate all TVs in the property',
                'action': TaskAction.DEMONSTRATE.value, 'subject': 'TV operation', 'location': 'Living Areas',
                'required': True, 'estimated_time': 3, 'photo_required': False,
                'order': 1, 'priority': MEDIUM
            },
            {
                'id': 'living-2', 'name': 'Explain vinyl player restriction',
                'description': 'Inform guest that the vinyl player is NOT to be used during their stay',
                'action': TaskAction.EXPLAIN.value, 'subject': 'vinyl player restriction', 'location': 'Sitting Room',
                'required': True, 'estimated_time': 1, 'photo_required': False,
                'order': 2, 'priority': HIGH
            },
            {
                'id': 'living-3', 'name': 'Show entertainment features',
                'description': 'Explain any other entertainment features or systems available',
                'action': TaskAction.SHOW.value, 'subject': 'entertainment features', 'location': 'Living Areas',
                'required': False, 'estimated_time': 2, 'photo_required': False,
                'order': 3, 'priority': LOW
            }
        ]
    },
    {
        'id': 'bedrooms', 'code': 'BED', 'name': 'Bedrooms',
        'tasks': [
            {
                'id': 'bedroom-1', 'name': 'Show bedroom features',
                'description': 'Point out bedroom amenities, wardrobe space, and lighting controls',
                'action': TaskAction.SHOW.value, 'subject': 'bedroom features', 'location': 'Bedrooms',
                'required': True, 'estimated_time': 2, 'photo_required': False,
                'order': 1, 'priority': LOW
            },
            {
                'id': 'bedroom-2', 'name': 'Explain storage locations',
                'description': 'Show guests where to find extra pillows, blankets, and storage space',
                'action': TaskAction.SHOW.value, 'subject': 'storage locations', 'location': 'Bedrooms',
                'required': False, 'estimated_time': 2, 'photo_required': False,
                'order': 2, 'priority': LOW
            }
        ]
    },
    {
        'id': 'bathrooms', 'code': 'BATH', 'name': 'Bathrooms',
        'tasks': [
            {
                'id': 'bathroom-1', 'name': 'Explain toilet flush',
                'description': 'Explain that toilet has low flow flush and may require multiple flushes to clear bowl',
                'action': TaskAction.EXPLAIN.value, 'subject': 'toilet low flow flush', 'location': 'Bathrooms',
                'required': True, 'estimated_time': 1, 'photo_required': False,
                'order': 1, 'priority': MEDIUM
            },
            {
                'id': 'bathroom-2', 'name': 'Show bathroom amenities',
                'description': 'Point out towels, toiletries, and bathroom features',
                'action': TaskAction.SHOW.value, 'subject': 'bathroom amenities', 'location': 'Bathrooms',
                'required': True, 'estimated_time': 1, 'photo_required': False,
                'order': 2, 'priority': LOW
            }
        ]
    }
]

INFO_TASKS = [
    {
        'id': 'info-1', 'name': 'Provide WiFi information',
        'description': 'Give guest the WiFi network name and password',
        'action': TaskAction.EXPLAIN.value, 'subject': 'WiFi network and password',
        'required': True, 'estimated_time': 2, 'photo_required': False,
        'order': 1, 'priority': HIGH
    },
    {
        'id': 'info-2', 'name': 'Explain guest app',
        'description': 'Demonstrate how to use the hosted guest app for support and information',
        'action': TaskAction.DEMONSTRATE.value, 'subject': 'guest app features',
        'required': True, 'estimated_time': 3, 'photo_required': False,
        'order': 2, 'priority': HIGH
    },
    {
        'id': 'info-3', 'name': 'Review house rules',
        'description': 'Summarize key house rules: no smoking, communal lights, vinyl player restriction',
        'action': TaskAction.REVIEW.value, 'subject': 'house rules',
        'required': True, 'estimated_time': 2, 'photo_required': False,
        'order': 3, 'priority': HIGH
    },
    {
        'id': 'info-4', 'name': 'Explain refuse & recycling',
        'description': "Show location of communal bins outside building (turn left, by white pillar marked "
                       "'Mansions'). Emphasize not to leave bags on pavement.",
        'action': TaskAction.EXPLAIN.value, 'subject': 'refuse and recycling instructions',
        'required': True, 'estimated_time': 2, 'photo_required': False,
        'order': 4, 'priority': MEDIUM
    },
    {
        'id': 'info-5', 'name': 'Provide emergency contacts',
        'description': 'Give guest emergency contact information and 24/7 support details',
        'action': TaskAction.REVIEW.value, 'subject': 'emergency contacts',
        'required': True, 'estimated_time': 1, 'photo_required': False,
        'order': 5, 'priority': HIGH
    },
    {
        'id': 'info-6', 'name': 'Explain maid service (if applicable)',
        'description': 'For stays over 8 nights, explain maid service schedule and what to expect',
        'action': TaskAction.EXPLAIN.value, 'subject': 'maid service schedule',
        'required': False, 'estimated_time': 2, 'photo_required': False,
        'order': 6, 'priority': LOW,
        'conditional': {'occupancy': Occupancy.BOOKING.value}
    },
    {
        'id': 'info-7', 'name': 'Answer guest questions',
        'description': 'Allow time for guest questions and provide any additional information needed',
        'action': TaskAction.ANSWER_QUESTIONS.value, 'subject': 'guest inquiries',
        'required': True, 'estimated_time': 3, 'photo_required': False,
        'order': 7, 'priority': MEDIUM
    },
    {
        'id': 'info-8', 'name': 'Final walkthrough photo',
        'description': 'Take photo with guest confirming successful meet & greet completion',
        'action': TaskAction.PHOTOGRAPH.value, 'subject': 'meet & greet completion',
        'required': False, 'estimated_time': 1, 'photo_required': True, 'photo_count': 1,
        'order': 8, 'priority': LOW
    }
]

ALB134_MEET_GREET_TEMPLATE = {
    'type': ActivityType.MEET_GREET.value,
    'name': 'Meet & Greet - ALB134',
    'description': 'Welcome guest and provide comprehensive home orientation',
    'estimated_total_time': 45,
    'metadata': ALB134_METADATA,
    'phases': [
        {'id': 'arrival', 'name': PhaseName.ARRIVE.value, 'order': 1, 'tasks': ARRIVAL_TASKS},
        {'id': 'home-tour', 'name': PhaseName.DURING.value, 'order': 2, 'rooms': TOUR_ROOMS},
        {'id': 'departure-info', 'name': PhaseName.DEPART.value, 'order': 3, 'tasks': INFO_TASKS},
    ]
}
