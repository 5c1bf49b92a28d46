import sys

import httpx

from apibase import (
    ApiClient,
    ApiError,
    ApplicationError,
    ClientConfig,
    DefaultParamsHooks,
    ResultView,
)


class HttpbinHooks(DefaultParamsHooks):
    def check_for_special_response_errors(self, response: httpx.Response) -> None:
        if 'application/json' not in response.headers.get('content-type', ''):
            raise ApplicationError('expected a JSON body', response)


def result_str(result: ResultView) -> str:
    sep = '-------------------------'
    lines = [sep]
    for key in ('url', 'origin'):
        lines.append(f'{key}: {result.get(key) or "N/A"}')
    for name, value in result.view('args').items():
        lines.append(f'arg {name}={value}')
    lines.append(sep)
    return '\n'.join(lines)


def main() -> int:
    query = sys.argv[1] if len(sys.argv) > 1 else 'hello world'

    config = ClientConfig(
        protocol='https',
        host='httpbin.org',
        port=443,
        use_ssl=True,
        timeout_seconds=10,
    )
    hooks = HttpbinHooks({'v': '3'})

    exit_code = 1
    with ApiClient(config, hooks=hooks) as client:
        try:
            client.get('response-headers', {'Set-Cookie': 'session=demo; Path=/'})
            response = client.get('get', {'q': query}, suppress_log=True)
            print(result_str(ResultView(response.json())))
            print(f'cookies held: {client.cookies.header_value() or "none"}')
            exit_code = 0
        except ApiError as exc:
            print(f'Request failed: {exc}')
        except httpx.HTTPError as exc:
            print(f'Error reaching httpbin, check your network connection {exc}')

    return exit_code


if __name__ == '__main__':
    sys.exit(main())
