import sys
import pygame

from settings import WINDOW_WIDTH, WINDOW_HEIGHT, TITLE, FPS, TICKS_PER_SECOND
from engine.controllers.time_interpolator import ClientTimeManager
from engine.error_handler import LOG_DIR
from engine.managers.time_service_manager import TimeServiceManager
from engine.net.broadcast import Broadcaster, LoopbackObserver
from telemetry.logger import telemetry
from ui.clock_hud import draw_clock
from world.level import SimLevel
from world.time.config import ClientTimeConfig, TimeConfig

LEVEL_ID = "overworld"
PARTICIPANTS = ("alice", "bob", "carol")


def main() -> None:
    pygame.init()
    pygame.display.set_caption(TITLE)

    screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.Font(None, 28)

    telemetry.init(LOG_DIR / "telemetry.jsonl")

    # --- Authority side ---
    config = TimeConfig.load()
    broadcaster = Broadcaster()
    services = TimeServiceManager(config, broadcaster=broadcaster)
    server_level = SimLevel(LEVEL_ID, day_time=0)
    services.on_level_load(server_level)
    services.on_participants_changed(LEVEL_ID, len(PARTICIPANTS))

    # --- Observer side, connected through a loopback ---
    client_level = SimLevel(LEVEL_ID, day_time=0)
    client = ClientTimeManager(ClientTimeConfig.load())
    client.on_level_load(client_level)
    broadcaster.add(LoopbackObserver("local", client_level))

    step_seconds = 1.0 / TICKS_PER_SECOND
    accumulator = 0.0
    paused = False

    # --- Main loop ---
    running = True
    while running:
        dt = clock.tick(FPS) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                continue

            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    paused = not paused
                elif pygame.K_1 <= event.key < pygame.K_1 + len(PARTICIPANTS):
                    # Number keys toggle a participant's sleep
                    who = PARTICIPANTS[event.key - pygame.K_1]
                    if who in server_level.sleeping:
                        server_level.sleeping.discard(who)
                        services.on_wake(LEVEL_ID, who)
                    else:
                        server_level.sleeping.add(who)
                        services.on_sleep(LEVEL_ID, who)

        if not paused:
            accumulator += dt
            while accumulator >= step_seconds:
                accumulator -= step_seconds
                services.on_level_tick(LEVEL_ID)
                server_level.tick()
                client_level.tick()
                client.on_client_tick(LEVEL_ID)

        client.on_render_frame(LEVEL_ID, accumulator / step_seconds, paused=paused)

        controller = services.get(LEVEL_ID)
        speed = controller.time_speed(controller.get_day_time()) if controller is not None else 1.0
        status = [
            f"Speed: {speed:.2f}x",
            "Asleep: " + (", ".join(sorted(server_level.sleeping)) or "nobody"),
            "[1-3] toggle sleep  [space] pause",
        ]
        draw_clock(screen, font, client_level.get_day_time(), status)
        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
