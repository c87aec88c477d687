import logging

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..enums import AdminRole, ComponentCategory, ComponentType, Difficulty, QuestionCategory
from ..models import Admin, Component, QuizQuestion
from ..security import get_password_hash

logger = logging.getLogger(__name__)

DEFAULT_COMPONENTS: list[dict] = [
    {
        "name": "DHT22 Temperature & Humidity Sensor",
        "type": ComponentType.SENSOR,
        "icon": "📡",
        "description": "Digital sensor for measuring temperature and humidity with high accuracy",
        "price": 300,
        "specifications": {"Temperature Range": "-40°C to 80°C", "Humidity Range": "0-100% RH"},
        "category": ComponentCategory.ESSENTIAL,
    },
    {
        "name": "LM358 Op-Amp",
        "type": ComponentType.SIGNAL,
        "icon": "⚡",
        "description": "Dual operational amplifier for signal conditioning and amplification",
        "price": 150,
        "specifications": {"Channels": "2", "Supply Voltage": "3-32V"},
        "category": ComponentCategory.ESSENTIAL,
    },
    {
        "name": "ESP32 Microcontroller",
        "type": ComponentType.CONTROLLER,
        "icon": "🧠",
        "description": "Powerful microcontroller with built-in WiFi and Bluetooth",
        "price": 400,
        "specifications": {"CPU": "Dual-core 240MHz", "RAM": "520KB"},
        "category": ComponentCategory.ESSENTIAL,
    },
    {
        "name": "ESP8266 WiFi Module",
        "type": ComponentType.COMMUNICATION,
        "icon": "📶",
        "description": "Low-cost WiFi module for IoT connectivity",
        "price": 250,
        "specifications": {"Protocol": "WiFi 802.11 b/g/n", "Frequency": "2.4GHz"},
        "category": ComponentCategory.ESSENTIAL,
    },
    {
        "name": "ThingSpeak Cloud Platform",
        "type": ComponentType.CLOUD,
        "icon": "☁️",
        "description": "IoT cloud platform for data visualization and analysis",
        "price": 200,
        "specifications": {"Data Channels": "8", "API": "RESTful"},
        "category": ComponentCategory.ESSENTIAL,
    },
    {
        "name": "Relay Module",
        "type": ComponentType.ACTUATOR,
        "icon": "🔌",
        "description": "Electromagnetic switch for controlling high-power devices",
        "price": 180,
        "specifications": {"Load": "10A 250VAC", "Control": "5V DC"},
        "category": ComponentCategory.ESSENTIAL,
    },
    {
        "name": "Ultrasonic Distance Sensor",
        "type": ComponentType.SENSOR,
        "icon": "📡",
        "description": "Non-contact distance measurement using ultrasonic waves",
        "price": 200,
        "specifications": {"Range": "2cm to 400cm", "Accuracy": "3mm"},
        "category": ComponentCategory.OPTIONAL,
    },
    {
        "name": "ADC Converter Module",
        "type": ComponentType.SIGNAL,
        "icon": "⚡",
        "description": "Analog to Digital Converter for precise signal conversion",
        "price": 220,
        "specifications": {"Resolution": "16-bit", "Channels": "4"},
        "category": ComponentCategory.OPTIONAL,
    },
    {
        "name": "Arduino Nano",
        "type": ComponentType.CONTROLLER,
        "icon": "🧠",
        "description": "Compact microcontroller board based on ATmega328P",
        "price": 350,
        "specifications": {"CPU": "ATmega328P 16MHz", "Digital I/O": "14"},
        "category": ComponentCategory.OPTIONAL,
    },
    {
        "name": "LoRa Module",
        "type": ComponentType.COMMUNICATION,
        "icon": "📶",
        "description": "Long-range, low-power wireless communication module",
        "price": 380,
        "specifications": {"Frequency": "868/915MHz", "Range": "Up to 15km"},
        "category": ComponentCategory.OPTIONAL,
    },
    {
        "name": "AWS IoT Core",
        "type": ComponentType.CLOUD,
        "icon": "☁️",
        "description": "Amazon managed cloud service for IoT device connectivity",
        "price": 350,
        "specifications": {"Protocol": "MQTT, HTTP", "Security": "TLS 1.2"},
        "category": ComponentCategory.OPTIONAL,
    },
    {
        "name": "Servo Motor",
        "type": ComponentType.ACTUATOR,
        "icon": "🔌",
        "description": "Precision rotary actuator with position control",
        "price": 280,
        "specifications": {"Torque": "1.8kg-cm", "Control": "PWM"},
        "category": ComponentCategory.OPTIONAL,
    },
]

DEFAULT_QUESTIONS: list[dict] = [
    {
        "question": "What does IoT stand for?",
        "options": ["Internet of Things", "Integration of Technology", "Interface of Tools", "Internet of Terminals"],
        "correct_answer": 0,
        "category": QuestionCategory.IOT,
        "difficulty": Difficulty.EASY,
    },
    {
        "question": "Which protocol is commonly used for IoT device communication?",
        "options": ["FTP", "MQTT", "SMTP", "POP3"],
        "correct_answer": 1,
        "category": QuestionCategory.NETWORKING,
        "difficulty": Difficulty.MEDIUM,
    },
    {
        "question": "What is the primary function of a sensor in an IoT system?",
        "options": ["Store data", "Collect data", "Process data", "Transmit data"],
        "correct_answer": 1,
        "category": QuestionCategory.IOT,
        "difficulty": Difficulty.EASY,
    },
    {
        "question": "Which microcontroller is widely used for IoT projects?",
        "options": ["Intel Core i7", "ESP32", "AMD Ryzen", "NVIDIA Tesla"],
        "correct_answer": 1,
        "category": QuestionCategory.ELECTRONICS,
        "difficulty": Difficulty.EASY,
    },
    {
        "question": "What is the purpose of signal conditioning in IoT?",
        "options": [
            "Amplify or filter sensor signals",
            "Store sensor data",
            "Power the sensor",
            "Display sensor values",
        ],
        "correct_answer": 0,
        "category": QuestionCategory.ELECTRONICS,
        "difficulty": Difficulty.MEDIUM,
    },
    {
        "question": "Which cloud platform is specifically designed for IoT?",
        "options": ["Google Drive", "AWS IoT Core", "Dropbox", "OneDrive"],
        "correct_answer": 1,
        "category": QuestionCategory.IOT,
        "difficulty": Difficulty.MEDIUM,
    },
    {
        "question": "What does an actuator do in an IoT system?",
        "options": ["Reads sensor data", "Performs physical action", "Stores data", "Encrypts data"],
        "correct_answer": 1,
        "category": QuestionCategory.IOT,
        "difficulty": Difficulty.EASY,
    },
    {
        "question": "Which wireless technology has the longest range?",
        "options": ["Bluetooth", "WiFi", "LoRa", "NFC"],
        "correct_answer": 2,
        "category": QuestionCategory.NETWORKING,
        "difficulty": Difficulty.MEDIUM,
    },
    {
        "question": "What is the typical operating frequency of WiFi?",
        "options": ["900 MHz", "1.8 GHz", "2.4 GHz", "5.8 GHz"],
        "correct_answer": 2,
        "category": QuestionCategory.NETWORKING,
        "difficulty": Difficulty.MEDIUM,
    },
    {
        "question": "Which component converts analog signals to digital?",
        "options": ["DAC", "ADC", "Op-Amp", "Transistor"],
        "correct_answer": 1,
        "category": QuestionCategory.ELECTRONICS,
        "difficulty": Difficulty.MEDIUM,
    },
    {
        "question": "What is the main advantage of edge computing in IoT?",
        "options": ["Cheaper hardware", "Reduced latency", "Better graphics", "Larger storage"],
        "correct_answer": 1,
        "category": QuestionCategory.IOT,
        "difficulty": Difficulty.HARD,
    },
    {
        "question": "Which protocol ensures secure data transmission in IoT?",
        "options": ["HTTP", "HTTPS/TLS", "FTP", "Telnet"],
        "correct_answer": 1,
        "category": QuestionCategory.NETWORKING,
        "difficulty": Difficulty.HARD,
    },
]


async def _count(session: AsyncSession, model) -> int:
    return (await session.execute(select(func.count()).select_from(model))).scalar_one()


async def seed_catalog(session: AsyncSession) -> dict[str, int]:
    """Insert the default components and questions into an empty catalog."""
    inserted = {"components": 0, "questions": 0}

    if not await _count(session, Component):
        session.add_all(Component(**data) for data in DEFAULT_COMPONENTS)
        inserted["components"] = len(DEFAULT_COMPONENTS)

    if not await _count(session, QuizQuestion):
        session.add_all(
            QuizQuestion(sort_order=index, **data) for index, data in enumerate(DEFAULT_QUESTIONS)
        )
        inserted["questions"] = len(DEFAULT_QUESTIONS)

    if any(inserted.values()):
        await session.commit()
        logger.info(
            "Seeded catalog with %s components and %s questions",
            inserted["components"],
            inserted["questions"],
        )
    return inserted


async def ensure_bootstrap_admin(
    session: AsyncSession,
    *,
    username: str | None,
    password: str | None,
) -> Admin | None:
    if not username or not password:
        return None
    if await _count(session, Admin):
        return None

    admin = Admin(
        username=username.lower(),
        hashed_password=get_password_hash(password),
        name="System Admin",
        role=AdminRole.SUPER_ADMIN,
    )
    session.add(admin)
    await session.commit()
    await session.refresh(admin)
    logger.info("Created bootstrap super admin %s", admin.username)
    return admin
