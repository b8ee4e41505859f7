from fastapi.testclient import TestClient
from app.main import app

with TestClient(app) as client:
    print('ROOT:')
    print(client.get('/').json())

    print('\nHEALTH:')
    print(client.get('/health').json())

    print('\nPANIC POLICIES:')
    for entry in client.get('/panic/policies').json():
        print(entry['context'], entry['config'])

    print('\nDB HEALTH:')
    try:
        resp = client.get('/health/db')
        print(resp.status_code)
        try:
            print(resp.json())
        except Exception:
            print(resp.text)
    except Exception as e:
        print('DB call raised exception:', e)
