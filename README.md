# servercore

Building blocks for a small TCP server, two commands that use them, and a
model of a keyboard/mouse/gamepad input backend for an immediate-mode GUI.

## Modules

- `servercore.network_address`: `NetworkAddress`, an IPv4 address and port.
  `NetworkAddress("127.0.0.1", 8888)` validates both (bad addresses raise
  `ValueError`, ports outside 0-65535 raise `ValueError`).
  `NetworkAddress.from_socket_address((host, port))` builds one from a socket
  tuple. Its properties are `ip`, `port`, `packed` (four network-order bytes)
  and `socket_address` (the `(ip, port)` tuple). `ip_string_to_packed(ip)`
  converts a dotted-quad string to bytes.
- `servercore.network_utils`: `create_socket(overlapped)` makes an IPv4 TCP
  socket, non-blocking when `overlapped` is true. The module also has
  `close_socket`, `bind`, `bind_port` (all interfaces), `listen`, and option
  setters: `set_linger`, `set_reuse_address`, `set_tcp_no_delay`,
  `set_recv_buffer_size` and `set_send_buffer_size`. Failures raise `OSError`.
- `servercore.thread_local`: `assign_thread_id()` gives the calling thread a
  fresh process-unique integer id. `current_thread_id()` returns that id, or 0
  if none has been assigned.
- `servercore.lock`: `Lock`, an exclusive write lock that the owning thread
  may take again without blocking. Each `write_lock()` must be matched by a
  `write_unlock()`. An unlock from a thread that does not own the lock is
  ignored. `Lock` can be used as a context manager, and `write_lock_guard(lock)`
  is a context manager too. `owner_thread_id` and `nested_count` expose the
  lock's state.
- `servercore.thread_manager`:
  - `Task`: a named callable with a `status` (`TaskStatus.CREATED`, `RUNNING`,
    `COMPLETED`, `CANCELED`) and `is_done`. Calling `cancel()` before
    `execute()` stops it from running.
  - `TaskQueue`: a blocking FIFO. `pop()` returns `None` once `shutdown()`
    has been called.
  - `ThreadManager`: `launch(callback, thread_name)` runs a callback on a new
    thread and `join()` waits for those threads. `initialize_thread_pool(n)`
    starts `n` workers (one per CPU if `n <= 0`), `push_task(func, name)`
    queues work for them, and `shutdown_thread_pool()` stops them without
    running what is still queued. `shutdown()` does close, join and pool
    shutdown together. It is also the context manager exit.
- `servercore.core_global`: `CoreGlobal` creates a process-wide
  `ThreadManager`, which `get_thread_manager()` returns while it is alive.
  `close()` (or leaving the `with` block) shuts the manager down.
  `get_thread_manager()` raises `RuntimeError` when there is no live one.
- `servercore.server`: `open_listener(port, backlog)`, `accept_client(listener)`
  and `serve(port)`. `serve` accepts one client, discards what it sends until
  it disconnects, and returns the client's `NetworkAddress`.
- `servercore.dummy_client`: `run_client(host, port, message, interval, count)`
  connects and sends `message` every `interval` seconds until a send fails, or
  until it has sent `count` times. It returns the number of successful sends.
- `servercore.glfw_keys`: the `GlfwKey` and `ImGuiKey` enums.
  `key_to_imgui_key(key)` maps one to the other. `translate_untranslated_key(key,
  scancode, get_key_name)` maps a layout-independent key back to the key the
  keyboard layout prints.
- `servercore.glfw_backend`: `GlfwWindow` holds the state of a window,
  `InputIO` holds the input state and the event queue, and `GlfwBackend` holds
  the event callbacks.
  - `init_for_opengl`, `init_for_vulkan` and `init_for_other` attach a backend
    to an `InputIO` and a window. By default they install the callbacks on the
    window, and a backend installed this way chains to the callbacks that were
    there before.
  - `restore_callbacks` puts the earlier callbacks back.
  - `shutdown` detaches the backend.
- `servercore.glfw_frame`: `new_frame(backend, imgui_cursor, gamepad)` updates
  display size, frame time step, mouse position, cursor shape and gamepad
  input. It uses `update_mouse_data`, `update_mouse_cursor`, `update_gamepads`
  and `saturate`. `GamepadState` holds 15 buttons and 6 axes in the standard
  gamepad order.

## Installing

```
pip install .
```

With the test dependencies:

```
pip install .[test]
pytest
```

## Commands

Listen on port 8888 (change with `--port`), accept one client and keep the
connection until the client disconnects:

```
servercore-server
```

Connect to `127.0.0.1:8888` and send `Hello World` once a second:

```
servercore-dummy-client
```

The client's options are `--host`, `--port`, `--message`, `--interval`
(seconds between sends) and `--count` (stop after this many sends).

## Library use

```python
from servercore.core_global import CoreGlobal
from servercore.lock import Lock

lock = Lock()
with CoreGlobal() as core:
    def work():
        with lock:
            with lock:  # the owning thread may lock it again
                print("hi")

    core.thread_manager.launch(work, "greeter")
    core.thread_manager.join()
```

```python
from servercore.network_address import NetworkAddress

addr = NetworkAddress("127.0.0.1", 8888)
print(addr.ip, addr.port, addr.socket_address)
```

## What this package does not do

- The server has no protocol. It accepts a single client and ignores the
  bytes it receives. It does not serve several clients or reply to anything.
- The input backend is a model only. The package opens no windows, reads no
  real keyboard, mouse or joystick, and draws nothing. Window state, key
  presses and gamepad snapshots are passed in as plain Python objects
  (`GlfwWindow`, `GamepadState`). The resulting events are collected on
  `InputIO.events`.