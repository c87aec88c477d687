from enum import Enum


class Sector(str, Enum):
    LUMINA_DISTRICT = "Lumina District"
    HYDROCORE = "HydroCore"
    AEROHAB = "AeroHab"


class ComponentType(str, Enum):
    SENSOR = "sensor"
    SIGNAL = "signal"
    CONTROLLER = "controller"
    COMMUNICATION = "communication"
    CLOUD = "cloud"
    ACTUATOR = "actuator"
    OTHER = "other"


class ComponentCategory(str, Enum):
    ESSENTIAL = "essential"
    OPTIONAL = "optional"


class QuestionCategory(str, Enum):
    IOT = "iot"
    ELECTRONICS = "electronics"
    PROGRAMMING = "programming"
    NETWORKING = "networking"
    GENERAL = "general"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class AdminRole(str, Enum):
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"
