# sockdrills

A set of small networking tools built on the standard library's `socket`,
`selectors` and `os` modules: a line-based TCP echo client, single-threaded
echo servers driven by select, poll or epoll, a threaded echo server that
also records what it echoes to a log file, a two-way pipe exchange, a
console-input watcher, and UDP broadcast and multicast senders and
receivers. There are no third-party dependencies.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Commands

### Echo client and servers

Start an echo server on a port. It accepts any number of clients on one
thread and sends each chunk a client sends straight back, printing a line
for every connection, message and disconnection:

```
sockdrills-echo-server 9190
sockdrills-echo-server 9190 --backend poll
```

`--backend` is one of `select` (the default), `poll` or `epoll`. A backend
the platform lacks (epoll outside Linux, for instance) is reported as an
error.

Connect to it and type lines. Each line is sent, and the reply is printed as
`Message from server : ...`; a line holding only `q` or `Q` ends the session:

```
sockdrills-echo-client 127.0.0.1 9190
```

An echo server that serves each client on its own thread and also writes the
first ten chunks it receives, from all clients together, to `echomsg.txt`:

```
sockdrills-logging-server 9190
sockdrills-logging-server 9190 --log messages.txt --limit 20
```

### Pipes

Send a question from a helper thread through one OS pipe and an answer back
through another, printing what each side heard. Each side reads at most 30
bytes, so longer messages are cut short:

```
sockdrills-pipes
sockdrills-pipes --question "who are you" --answer "thank you"
```

### Console input

Wait for input on standard input, printing `time-out` after each five
seconds of silence and echoing input in chunks of up to 30 bytes as it
arrives, until end of input:

```
sockdrills-console
sockdrills-console --timeout 2
```

With `--method poll` or `--method epoll` it waits only once, reports a
timeout or reads and prints a single line, and exits.

### Broadcast

Receive broadcast datagrams on a port, then send one from another terminal
(to `255.255.255.255` unless `--address` says otherwise):

```
sockdrills-broadcast-recv 9190
sockdrills-broadcast-send 9190 "hello everyone"
```

### Multicast

Join a multicast group and print what arrives, then send to the group
(`--ttl` sets the time-to-live, 64 by default):

```
sockdrills-multicast-recv 224.1.1.2 9190
sockdrills-multicast-send 224.1.1.2 9190 "hello group"
```

## Library use

`EchoClient.send` waits for the reply, so the server has to be served from
another thread while the client talks to it:

```python
import threading

from sockdrills.echo_client import EchoClient
from sockdrills.echo_server import Backend, EchoServer

with EchoServer(0, host="127.0.0.1", backend=Backend.POLL) as server:
    host, port = server.address

    def serve():
        server.serve_once(1.0)  # accept the client
        server.serve_once(1.0)  # echo its message

    worker = threading.Thread(target=serve)
    worker.start()
    with EchoClient(host, port) as client:
        print(client.send("hello\n"))
    worker.join()
```

Other entry points:

- `sockdrills.echo_client.run_session(client, lines, output)` drives a
  session from any iterable of lines; `is_quit(line)` tells a quit line.
- `sockdrills.logging_server.LoggingEchoServer` has `accept_one()`,
  `serve_forever()` and `wait_for_log(timeout)`.
- `sockdrills.pipes.exchange(question, answer)` returns the pair of messages
  each side heard.
- `sockdrills.console.wait_for_input(stream, timeout, method)` returns
  whether a stream becomes readable in time, using a `WaitMethod`;
  `read_once` and `watch` are the routines behind the console command.
- `sockdrills.broadcast.send_broadcast(port, message, address)` and
  `receive_broadcasts(port, host)`, which binds at once and yields
  `(sender, text)` pairs.
- `sockdrills.multicast.send_multicast(group, port, message, ttl)`,
  `open_receiver(group, port)` and `receive_multicast(group, port)`.

## Limits

The tools are plain TCP and UDP exercises: no TLS, no message framing beyond
what one read returns, and no IPv6 for broadcast or multicast.