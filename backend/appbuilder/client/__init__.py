from appbuilder.client.consumer import (
    DisplayState,
    StreamConsumer,
    consume_stream,
    generate_app,
)
