"""NAMASTE reference codes, v1."""

NAMC_CODES = [
    {
        "code": "NAM001",
        "term": "Vata Dosha Imbalance",
        "system": "ayurveda",
        "native_term": "vAtaprakopaH",
        "definition": "Aggravation of Vata dosha presenting with dryness, pain and irregular movement.",
    },
    {
        "code": "NAM002",
        "term": "Pitta Dosha Imbalance",
        "system": "ayurveda",
        "native_term": "pittaprakopaH",
        "definition": "Aggravation of Pitta dosha presenting with heat, burning and inflammation.",
    },
    {
        "code": "NAM003",
        "term": "Kapha Dosha Imbalance",
        "system": "ayurveda",
        "native_term": "kaphaprakopaH",
        "definition": "Aggravation of Kapha dosha presenting with heaviness, congestion and stagnation.",
    },
    {
        "code": "NAM004",
        "term": "Digestive Fire Weakness",
        "system": "ayurveda",
        "native_term": "agnimAndyam",
        "definition": "Diminished digestive capacity with poor appetite and incomplete digestion.",
    },
    {
        "code": "NAM005",
        "term": "Mental Agitation Pattern",
        "system": "ayurveda",
        "native_term": "cittodvegaH",
        "definition": "Restlessness of mind with anxiety and disturbed sleep.",
    },
    {
        "code": "NAM006",
        "term": "Vata Disorder of Joints",
        "system": "ayurveda",
        "native_term": "sandhivAtaH",
        "definition": "Degenerative joint condition attributed to vitiated Vata.",
    },
    {
        "code": "NAM007",
        "term": "Fever due to Pitta",
        "system": "ayurveda",
        "native_term": "pittajajvaraH",
        "definition": "Fever with burning sensation, thirst and yellowish discoloration.",
    },
    {
        "code": "NAM008",
        "term": "Productive Cough",
        "system": "ayurveda",
        "native_term": "kaphajakAsaH",
        "definition": "Cough with heavy, sticky expectoration attributed to Kapha.",
    },
    {
        "code": "NAM009",
        "term": "Chronic Rhinitis",
        "system": "ayurveda",
        "native_term": "pratizyAyaH",
        "definition": "Persistent nasal discharge and congestion.",
    },
    {
        "code": "NAM010",
        "term": "Hyperacidity",
        "system": "ayurveda",
        "native_term": "amlapittam",
        "definition": "Sour eructation and heartburn attributed to vitiated Pitta.",
    },
    {
        "code": "NAM011",
        "term": "Constipation",
        "system": "ayurveda",
        "native_term": "vibandhaH",
        "definition": "Difficult or infrequent passage of stool.",
    },
    {
        "code": "NAM012",
        "term": "Insomnia",
        "system": "ayurveda",
        "native_term": "anidrA",
        "definition": "Inability to obtain adequate sleep.",
    },
    {
        "code": "NAM013",
        "term": "Headache",
        "system": "ayurveda",
        "native_term": "zirazUlam",
        "definition": "Pain localised to the head region.",
    },
    {
        "code": "NAM014",
        "term": "Skin Disease",
        "system": "ayurveda",
        "native_term": "kuSTham",
        "definition": "Group of chronic skin disorders with discoloration and itching.",
    },
    {
        "code": "NAM015",
        "term": "Obesity",
        "system": "ayurveda",
        "native_term": "sthaulyam",
        "definition": "Excess accumulation of fat tissue.",
    },
    {
        "code": "SID001",
        "term": "Vali Humour Derangement",
        "system": "siddha",
        "native_term": "vali kuttram",
        "definition": "Derangement of the Vali humour affecting movement and nerves.",
    },
    {
        "code": "SID002",
        "term": "Azhal Humour Derangement",
        "system": "siddha",
        "native_term": "azhal kuttram",
        "definition": "Derangement of the Azhal humour affecting heat and metabolism.",
    },
    {
        "code": "SID003",
        "term": "Iyam Humour Derangement",
        "system": "siddha",
        "native_term": "iyam kuttram",
        "definition": "Derangement of the Iyam humour affecting stability and fluids.",
    },
    {
        "code": "SID004",
        "term": "Joint Pain Disorder",
        "system": "siddha",
        "native_term": "keelvayu",
        "definition": "Painful swelling of joints.",
    },
    {
        "code": "UNA001",
        "term": "Sanguine Temperament Disorder",
        "system": "unani",
        "native_term": "su-e-mizaj damvi",
        "definition": "Imbalance of the sanguine humour.",
    },
    {
        "code": "UNA002",
        "term": "Bilious Temperament Disorder",
        "system": "unani",
        "native_term": "su-e-mizaj safravi",
        "definition": "Imbalance of the bilious humour.",
    },
    {
        "code": "UNA003",
        "term": "Phlegmatic Temperament Disorder",
        "system": "unani",
        "native_term": "su-e-mizaj balghami",
        "definition": "Imbalance of the phlegmatic humour.",
    },
    {
        "code": "UNA004",
        "term": "Melancholic Temperament Disorder",
        "system": "unani",
        "native_term": "su-e-mizaj saudavi",
        "definition": "Imbalance of the melancholic humour.",
    },
    {
        "code": "UNA005",
        "term": "Migraine",
        "system": "unani",
        "native_term": "shaqeeqa",
        "definition": "Episodic unilateral headache.",
    },
]
