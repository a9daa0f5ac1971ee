"""
课程导入脚本 - 把 lessons.json 写入 lessons 集合

    python seed_lessons.py lessons.json

带 id 的课程按 id 覆盖写入，可以重复执行；没有 id 的课程生成新 id。
"""
import argparse
import json
import logging

from bson import ObjectId

from database import Database
from logger import setup_logging
from models import Lesson

log = logging.getLogger(__name__)


def seed_lessons(db, lessons: list) -> int:
    """校验并写入课程，返回写入条数"""
    for entry in lessons:
        data = dict(entry)
        data["id"] = str(data.get("id") or ObjectId())
        lesson = Lesson.model_validate(data)
        db.lessons.replace_one(
            {"_id": lesson.id},
            {"_id": lesson.id, **lesson.model_dump(by_alias=True, exclude={"id"})},
            upsert=True,
        )
    return len(lessons)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Seed the lessons collection")
    parser.add_argument("path", help="JSON file holding a list of lessons")
    args = parser.parse_args(argv)

    setup_logging()
    with open(args.path, encoding="utf-8") as f:
        lessons = json.load(f)

    db = Database()
    try:
        count = seed_lessons(db, lessons)
    finally:
        db.close()
    log.info("Seeded %d lessons", count)


if __name__ == "__main__":
    main()
