from ..enums import ComponentType, Sector

SECTOR_BRIEFS: dict[Sector, dict] = {
    Sector.LUMINA_DISTRICT: {
        "title": "Smart Street Lighting System",
        "failure": "The light-sensing system misreads day as night, causing power surges.",
        "universe_flaw": "The planet's day-night cycle changes every 4 hours, so sensors must adapt dynamically.",
        "icon": "💡",
        "components": {
            ComponentType.SENSOR: "Light Sensor",
            ComponentType.SIGNAL: "Signal Conditioning",
            ComponentType.CONTROLLER: "Controller",
            ComponentType.COMMUNICATION: "Communication Interface",
            ComponentType.CLOUD: "Cloud/Local Log",
            ComponentType.ACTUATOR: "LED Streetlight / Relay Driver",
        },
    },
    Sector.HYDROCORE: {
        "title": "Smart Water Distribution",
        "failure": "Reservoir valves malfunction due to corrupted pressure data, leading to shortages.",
        "universe_flaw": "Gravity fluctuates and water flows unpredictably upward or sideways.",
        "icon": "💧",
        "components": {
            ComponentType.SENSOR: "Pressure Sensor",
            ComponentType.SIGNAL: "Signal Conditioning",
            ComponentType.CONTROLLER: "Controller",
            ComponentType.COMMUNICATION: "Communication Interface",
            ComponentType.CLOUD: "Cloud/Local Log",
            ComponentType.ACTUATOR: "Pump/Valve Driver",
        },
    },
}
