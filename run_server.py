"""
Start the Escape Zone backend locally.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Escape Zone Backend")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:     GET  http://localhost:8000/health")
    print("   - Recommendations:  POST http://localhost:8000/recommendations/query")
    print("   - Advice:           POST http://localhost:8000/advice")
    print("   - Chat session:     POST http://localhost:8000/chat/sessions")
    print("   - Login notify:     POST http://localhost:8000/api/auth/notify")
    print("   - API Docs:              http://localhost:8000/docs")
    print()
    print("📝 Test with curl:")
    print('   curl -X POST "http://localhost:8000/recommendations/query" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"category": "Movies", "genre": "Horror", "year": "2020s"}\'')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "escapezone.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
