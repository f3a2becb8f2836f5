"""Run a quick smoke check against the app.

Creates a teacher and a course through FastAPI's TestClient, then lists
courses with the teacher populated. Point `DATABASE_URL` at a scratch
database first if you do not want the rows kept.
"""

import sys
import os

# Ensure backend folder is on sys.path so `school_api` can be imported
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fastapi.testclient import TestClient
from school_api.main import app


def run():
    client = TestClient(app)
    resp = client.get('/health')
    print('HEALTH:', resp.status_code, resp.json())
    teacher = client.post('/teachers', json={'name': 'Ada', 'department': 'CS'})
    print('TEACHER:', teacher.status_code, teacher.json())
    if teacher.status_code != 201:
        return 1
    course = client.post('/courses', json={'title': 'Algo', 'description': 'Smoke test course', 'TeacherId': teacher.json()['id']})
    print('COURSE:', course.status_code, course.json())
    listing = client.get('/courses', params={'populate': 'teacher', 'limit': '5'})
    print('LIST:', listing.status_code, listing.json())
    return 0 if listing.status_code == 200 else 1


if __name__ == '__main__':
    sys.exit(run())
