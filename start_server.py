import uvicorn
from dotenv import load_dotenv

load_dotenv()

from catalog.core.config import get_settings

if __name__ == '__main__':
    settings = get_settings()
    print(f'Starting {settings.app_name} on http://{settings.host}:{settings.port}')
    uvicorn.run(
        app='catalog.main:app',
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        reload_excludes=['catalog/tests/*']
        )
