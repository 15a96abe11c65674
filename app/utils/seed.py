"""Sample catalog used to bootstrap an empty store."""

import logging
from typing import Dict, List

from app.db import crud
from app.db.store import DocumentStore
from app.models.carrier import CarrierCreate
from app.models.country import CountryCreate

logger = logging.getLogger("esimshop")

SAMPLE_COUNTRIES: List[Dict] = [
    {
        "code": "jp",
        "name": "日本",
        "flagIcon": "🇯🇵",
        "description": "體驗先進科技與傳統文化的完美結合，從東京的繁華都市到京都的古老寺廟，日本提供多樣化的旅遊體驗。",
    },
    {
        "code": "kr",
        "name": "韓國",
        "flagIcon": "🇰🇷",
        "description": "探索韓流文化發源地，享受首爾的現代都市風貌與濟州島的自然風光，韓國全境提供高速網路覆蓋。",
    },
    {
        "code": "th",
        "name": "泰國",
        "flagIcon": "🇹🇭",
        "description": "體驗熱帶風情與佛教文化，從曼谷的繁華市集到普吉島的純淨海灘，泰國提供多種適合不同旅遊需求的eSIM方案。",
    },
]

SAMPLE_CARRIERS: Dict[str, List[str]] = {
    "jp": ["NTT Docomo", "SoftBank", "KDDI (au)"],
    "kr": ["KT", "SK Telecom", "LG U+"],
    "th": ["AIS", "DTAC", "True Move H"],
}

JAPAN_NOTES = [
    "每日凌晨1點重置流量",
    "出貨後60日內須安裝",
    "QR CODE 僅限一支手機使用，無法交替，一經訂購無法取消",
]

SAMPLE_PLANS: Dict[str, List[Dict]] = {
    "jp": [
        {"carrier": "KDDI (au)", "plan_type": "daily", "title": "每日500MB", "data_per_day": "500MB",
         "duration_days": 3, "price": 120, "speed_policy": "用完每日流量後降速"},
        {"carrier": "KDDI (au)", "plan_type": "daily", "title": "每日1GB", "data_per_day": "1GB",
         "duration_days": 5, "price": 250, "speed_policy": "用完每日流量後降速"},
        {"carrier": "NTT Docomo", "plan_type": "total", "title": "總量3GB", "total_data": "3GB",
         "duration_days": 5, "price": 180, "speed_policy": "用完後降速至128kbps"},
    ],
    "kr": [
        {"carrier": "KT", "plan_type": "total", "title": "總量5GB", "total_data": "5GB",
         "duration_days": 7, "price": 290, "speed_policy": "用完後斷網"},
    ],
}


def seed_catalog(store: DocumentStore) -> Dict[str, int]:
    counts = {"countries": 0, "carriers": 0, "plans": 0}

    for sample in SAMPLE_COUNTRIES:
        country_id = crud.create_country(store, CountryCreate(**sample))
        counts["countries"] += 1

        for name in SAMPLE_CARRIERS.get(sample["code"], []):
            crud.create_carrier(store, CarrierCreate(name=name, countryId=country_id))
            counts["carriers"] += 1

        for plan in SAMPLE_PLANS.get(sample["code"], []):
            crud.create_plan(store, {
                "sim_type": "esim",
                "currency": "TWD",
                "sharing_supported": True,
                "device_limit": 1,
                "notes": JAPAN_NOTES if sample["code"] == "jp" else [],
                **plan,
                "countryId": country_id,
                "country": sample["name"],
            })
            counts["plans"] += 1

    logger.info(f"Seeded sample catalog: {counts}")
    return counts
