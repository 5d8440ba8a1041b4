# Wire action names carried in the "action" field of every frame.

# Inbound (server -> client)
SEND_MESSAGE = "send-message"
USER_JOINED = "user-join"
USER_LEFT = "user-left"
ROOM_JOINED = "room-joined"

# Outbound (client -> server). send-message travels both ways.
JOIN_ROOM = "join-room"
JOIN_ROOM_PRIVATE = "join-room-private"
LEAVE_ROOM = "leave-room"

INBOUND_ACTIONS = frozenset({SEND_MESSAGE, USER_JOINED, USER_LEFT, ROOM_JOINED})
