from story_chat import create_app

app = create_app()
